# database.py
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlmodel import SQLModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from . import config

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and the session factory for one application."""

    def __init__(self, url: str = config.DATABASE_URL, echo: bool = config.SQL_ECHO, **engine_kwargs):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, future=True, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Checks connectivity and creates the employees table if missing."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to get an async session from the app's database."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
