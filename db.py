# db.py
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)


# ---------- Store client (explicit lifecycle) ----------

class Database:
    """
    Owns the async engine and session factory.

    Constructed once at application start-up (see `main.lifespan`), kept on
    `app.state.db` and disposed at shutdown. Nothing else in the code base
    creates an engine.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    def connect(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, future=True)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()


# ---------- FastAPI dependency ----------

async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async DB session from the application's store client."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
