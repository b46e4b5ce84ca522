"""Classification of database driver errors."""

from sqlalchemy.exc import IntegrityError

# SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True when an IntegrityError was raised by a unique constraint or index.

    asyncpg exposes the SQLSTATE as `sqlstate`, psycopg as `pgcode`; SQLite
    only reports it in the message.
    """
    orig = getattr(error, "orig", None)
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    message = str(orig)
    return (
        "UNIQUE constraint failed" in message
        or "duplicate key value violates unique constraint" in message
    )
