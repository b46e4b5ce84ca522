"""
Operation-scoped database sessions.

Sessions are acquired lazily and released right after each operation so no
connection is held across calls to Stripe or other remote services.

Usage:
    # Single operation - acquires, commits and releases
    async with get_session() as session:
        result = await session.execute(query)

    # Several operations that must commit together
    async with transaction():
        await user_repo.create(user)
        await workspace_repo.create(workspace)

See also:
    - common/db/context.py: the ContextVar holding the transaction session
    - common/db/session.py: engine and session factory
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import get_logger
from common.db.session import AsyncSessionLocal
from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
)

logger = get_logger(__name__)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    All repository calls inside share one session. Commits on success, rolls
    back and re-raises on exception. Nested calls join the outer transaction.
    """
    existing = get_current_session()
    if existing is not None:
        yield existing
        return

    start = time.perf_counter()
    async with AsyncSessionLocal() as session:
        logger.debug(
            f"Transaction session acquire: {(time.perf_counter() - start) * 1000:.2f}ms"
        )

        token = set_current_session(session)
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Transaction rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            reset_current_session(token)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Reuses the session of an enclosing transaction() without committing;
    otherwise acquires a new session, commits and releases it.
    """
    existing = get_current_session()

    if existing is not None:
        yield existing
        return

    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
