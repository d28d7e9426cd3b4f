from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator
import asyncio
import logging

from chatbot_blocks.configs.settings import settings
from chatbot_blocks.exceptions.api_exceptions import TransientException

logger = logging.getLogger(__name__)

# Async engine
engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# Async session factory
async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Base class for the ORM models
Base = declarative_base()

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides one database session per request.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the enclosed writes as a single transaction.

    Commits when the block exits normally. Any failure, cancellation included,
    rolls the whole unit back so no half-written rows survive. Connectivity
    failures and timeouts are re-raised as TransientException.
    """
    try:
        yield session
        await session.commit()
    except (OperationalError, InterfaceError, TimeoutError, asyncio.TimeoutError) as e:
        await session.rollback()
        logger.warning("Transaction rolled back after database failure: %s", e)
        raise TransientException() from e
    except (Exception, asyncio.CancelledError):
        await session.rollback()
        raise


async def create_tables():
    """
    Create all tables that do not exist yet.
    """
    # Make sure every model is registered on Base.metadata
    import chatbot_blocks.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# Can be run directly to create the schema
if __name__ == "__main__":
    asyncio.run(create_tables())
