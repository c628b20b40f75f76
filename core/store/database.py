"""
Database Engine

Async SQLAlchemy engine and session factory for one database URL.
"""
from __future__ import annotations

import logging

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

logger = logging.getLogger(__name__)


class Database:
    """
    Owns an async engine and its session factory.

    Built once per process from RuntimeConfig and handed to the stores that
    need it; nothing here is module-global.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        connect_args = {"timeout": 30.0} if url.startswith("sqlite") else {}
        self.engine = create_async_engine(
            url,
            echo=echo,
            future=True,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self.sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self, *metadatas: MetaData) -> None:
        """Create missing tables for each metadata. Idempotent."""
        async with self.engine.begin() as conn:
            for metadata in metadatas:
                await conn.run_sync(metadata.create_all)
        logger.info("Tables ready on %s", self.engine.url.render_as_string(hide_password=True))

    async def drop_all(self, *metadatas: MetaData) -> None:
        async with self.engine.begin() as conn:
            for metadata in metadatas:
                await conn.run_sync(metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
