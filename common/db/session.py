from uuid import uuid4

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import pool
from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)

# Replace postgresql:// with postgresql+asyncpg:// for async support
ASYNC_DATABASE_URL = settings.database_url.replace(
    "postgresql://", "postgresql+asyncpg://"
)


def _engine_options() -> dict:
    """Engine options for the API process.

    Prepared statements get unique names so the engine works behind a
    transaction-pooling PgBouncer.
    """
    options = {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "connect_args": {
            "prepared_statement_name_func": lambda: f"__asyncpg_{uuid4()}__",
        },
    }

    if settings.db_use_nullpool:
        logger.info("Using NullPool - no connection pooling")
        options["poolclass"] = pool.NullPool
    else:
        logger.info(
            f"Using connection pooling - pool_size={settings.db_pool_size}, max_overflow={settings.db_pool_overflow}"
        )
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_pool_overflow

    return options


engine = create_async_engine(ASYNC_DATABASE_URL, **_engine_options())
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db():
    """Request-scoped session for endpoints that talk to the database directly.

    Repositories do not use this; they acquire sessions per operation through
    common.db.scoped.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Rolling back due to error {e}")
            await session.rollback()
            raise


async def dispose_engine():
    """Close pooled connections on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")
