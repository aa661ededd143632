"""
Async engine and session plumbing.

One ``AsyncSession`` per request, handed out by ``get_db``.  Repositories
only flush; this module decides when the unit of work is committed.
"""
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from bloglist.config import settings
from bloglist.middleware import install_query_counter

# Tests replace ``get_db`` with their own session factory rather than this engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def init_db() -> None:
    """
    Create missing tables on startup.

    There are no migrations: tables that already exist are left as they
    are.  Any failure propagates and aborts the application lifespan.
    """
    import bloglist.models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    Yield a session for one request.

    Commits once the route returns.  Any exception, including the domain
    errors raised by services, rolls the whole request back before it
    reaches the error handlers.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
