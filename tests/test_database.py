"""
PocketTasks AI - Database Connection Tests

Motor's client is patched; no MongoDB server is needed.
"""

from unittest.mock import MagicMock, patch

import pytest

from pockettasks.database import Database
from pockettasks.dependencies import build_store
from pockettasks.tasks.repository import InMemoryTaskStore, JsonFileTaskStore, MongoTaskStore


@pytest.fixture
def motor_client():
    with patch("pockettasks.database.AsyncIOMotorClient") as client_cls:
        yield client_cls


class TestConnectForBackend:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("backend", ["file", "memory"])
    async def test_non_mongo_backend_does_not_connect(self, motor_client, backend):
        db = Database()

        assert await db.connect_for_backend(backend) is False
        assert db.is_connected is False
        motor_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_mongo_backend_connects(self, motor_client):
        db = Database()

        assert await db.connect_for_backend("MONGO") is True
        assert db.is_connected is True
        motor_client.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, motor_client):
        db = Database()
        await db.connect("mongodb://example:27017", "tasks")
        await db.connect("mongodb://example:27017", "tasks")

        motor_client.assert_called_once_with("mongodb://example:27017")
        motor_client.return_value.__getitem__.assert_called_once_with("tasks")

    @pytest.mark.asyncio
    async def test_disconnect_closes_client(self, motor_client):
        db = Database()
        await db.connect_for_backend("mongo")

        await db.disconnect()

        motor_client.return_value.close.assert_called_once()
        assert db.is_connected is False

    def test_get_database_requires_connection(self):
        with pytest.raises(RuntimeError):
            Database().get_database()


class TestBuildStore:

    def test_file_backend(self):
        assert isinstance(build_store("file"), JsonFileTaskStore)

    def test_memory_backend(self):
        assert isinstance(build_store("memory"), InMemoryTaskStore)

    def test_mongo_backend_uses_connected_database(self):
        with patch("pockettasks.dependencies.database") as database:
            database.get_database.return_value = MagicMock()
            assert isinstance(build_store("mongo"), MongoTaskStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_store("redis")
