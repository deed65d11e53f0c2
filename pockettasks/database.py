"""
PocketTasks AI - Database Module

MongoDB connection for the mongo task store backend, using Motor (async driver).
The file and memory backends never open a connection.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from pockettasks.config import settings

logger = logging.getLogger(__name__)


MONGO_BACKEND = "mongo"


class Database:
    """MongoDB connection manager for the task store."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    async def connect(self, uri: Optional[str] = None, database_name: Optional[str] = None) -> None:
        """Connect to MongoDB; defaults come from settings."""
        if self.is_connected:
            return
        database_name = database_name or settings.MONGODB_DATABASE
        self.client = AsyncIOMotorClient(uri or settings.MONGODB_URI)
        self.db = self.client[database_name]
        logger.info(f"Connected to MongoDB database '{database_name}'")

    async def connect_for_backend(self, backend: Optional[str] = None) -> bool:
        """
        Connect only when the task store backend needs MongoDB.

        Returns:
            True if a connection is open afterwards
        """
        backend = (backend or settings.STORAGE_BACKEND).lower()
        if backend != MONGO_BACKEND:
            logger.debug(f"Task store backend is '{backend}', not connecting to MongoDB")
            return False
        await self.connect()
        return True

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get the database instance backing the mongo task store."""
        if self.db is None:
            raise RuntimeError("Database not connected. Set STORAGE_BACKEND=mongo and start the application lifespan.")
        return self.db


# Singleton database instance
database = Database()
