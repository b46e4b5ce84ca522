"""
Session context for the current task.

`transaction()` publishes its session here so every repository call made
inside the block shares it. Outside a transaction the context is empty and
`get_session()` acquires a session per operation.
"""

from contextvars import ContextVar
from functools import wraps
from typing import Optional, Callable, TypeVar, ParamSpec

from sqlalchemy.ext.asyncio import AsyncSession

_current_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_session", default=None
)


def get_current_session() -> Optional[AsyncSession]:
    """Return the session of the enclosing transaction, if any."""
    return _current_session.get()


def set_current_session(session: AsyncSession) -> object:
    """Publish a session; returns the token for reset_current_session."""
    return _current_session.set(session)


def reset_current_session(token: object) -> None:
    _current_session.reset(token)


def in_transaction() -> bool:
    return get_current_session() is not None


P = ParamSpec("P")
T = TypeVar("T")


def transactional(func: Callable[P, T]) -> Callable[P, T]:
    """
    Run the decorated coroutine inside one transaction.

    Usage:
        @transactional
        async def provision(user_id: int):
            await workspace_repo.create(...)
            await plan_repo.create(...)  # commits or rolls back with the above
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        from common.db.scoped import transaction as tx  # noqa: PLC0415

        async with tx():
            return await func(*args, **kwargs)

    return wrapper
