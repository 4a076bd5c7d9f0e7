from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .settings import MongoSettings

logger = logging.getLogger(__name__)


class MongoConnection:
    """Holds the process-wide Motor client and the application database."""

    def __init__(self, settings: MongoSettings, client: Optional[AsyncIOMotorClient] = None):
        self.settings = settings
        self._client: AsyncIOMotorClient = client or AsyncIOMotorClient(
            settings.resolved_url, **settings.client_kwargs()
        )
        self._db: AsyncIOMotorDatabase = self._client[settings.db]

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def db(self) -> AsyncIOMotorDatabase:
        return self._db

    async def ping(self) -> None:
        await self._client.admin.command("ping")

    def close(self) -> None:
        self._client.close()


async def connect_mongo(settings: MongoSettings) -> MongoConnection:
    """Create the client and verify the server is reachable."""
    conn = MongoConnection(settings)
    try:
        await conn.ping()
    except Exception:
        logger.error("Error connecting to MongoDB (db=%s)", settings.db, exc_info=True)
        conn.close()
        raise
    logger.info("Connected to MongoDB (db=%s)", settings.db)
    return conn
