"""
PocketTasks AI - Task Store

Persisted mirror of the task list: one serialized array under one storage key.
Includes a JSON file implementation (the local blob), a MongoDB implementation
and an in-memory implementation for testing.

The store is never the source of truth except at startup; the session owns
the live list and rewrites the whole array after every mutation.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pockettasks.tasks.models import Task

logger = logging.getLogger(__name__)


def tasks_from_blob(blob: Any, storage_key: str) -> Optional[List[Task]]:
    """
    Decode a persisted task array.

    Returns None when the content is not an array so callers can discard it.
    Non-object entries inside the array are skipped.
    """
    if not isinstance(blob, list):
        logger.warning(f"Stored value under '{storage_key}' is not an array, discarding it")
        return None
    tasks: List[Task] = []
    for item in blob:
        if not isinstance(item, dict):
            logger.warning(f"Skipping malformed task record under '{storage_key}': {item!r}")
            continue
        tasks.append(Task.from_dict(item))
    return tasks


class TaskStoreInterface(ABC):
    """
    Abstract interface for the task store.

    Enables swapping implementations (file or MongoDB for runtime, in-memory for tests).
    """

    @abstractmethod
    async def load(self) -> List[Task]:
        """Read the persisted list; corrupt content yields an empty list."""
        pass

    @abstractmethod
    async def save(self, tasks: List[Task]) -> None:
        """Replace the persisted list."""
        pass


class JsonFileTaskStore(TaskStoreInterface):
    """
    JSON file implementation of the task store.

    The file holds an object mapping storage keys to task arrays, the same
    shape a browser's local storage would give a single key. File access runs
    in a worker thread so the event loop is never blocked.
    """

    def __init__(self, path: str | Path, storage_key: str):
        self.path = Path(path)
        self.storage_key = storage_key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to parse task store at {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Task store at {self.path} is not a JSON object, discarding it")
            return {}
        return data

    async def load(self) -> List[Task]:
        data = await asyncio.to_thread(self._read_all)
        if self.storage_key not in data:
            return []
        tasks = tasks_from_blob(data[self.storage_key], self.storage_key)
        if tasks is None:
            # Drop the corrupt value so the next save starts clean
            del data[self.storage_key]
            await asyncio.to_thread(self._write_all, data)
            return []
        return tasks

    async def save(self, tasks: List[Task]) -> None:
        records = [task.to_dict() for task in tasks]
        data = await asyncio.to_thread(self._read_all)
        data[self.storage_key] = records
        await asyncio.to_thread(self._write_all, data)

    def _write_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


class MongoTaskStore(TaskStoreInterface):
    """
    MongoDB implementation of the task store.

    The whole list lives in one document keyed by the storage key.
    """

    COLLECTION_NAME = "task_lists"

    def __init__(self, db: AsyncIOMotorDatabase, storage_key: str):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]
        self.storage_key = storage_key

    async def load(self) -> List[Task]:
        doc = await self.collection.find_one({"_id": self.storage_key})
        if doc is None:
            return []
        tasks = tasks_from_blob(doc.get("tasks"), self.storage_key)
        if tasks is None:
            await self.collection.delete_one({"_id": self.storage_key})
            return []
        return tasks

    async def save(self, tasks: List[Task]) -> None:
        await self.collection.replace_one(
            {"_id": self.storage_key},
            {"_id": self.storage_key, "tasks": [task.to_dict() for task in tasks]},
            upsert=True,
        )


class InMemoryTaskStore(TaskStoreInterface):
    """
    In-memory implementation for CI-safe testing.

    Holds the raw blob so tests can seed corrupt content.
    """

    def __init__(self, blob: Any = None):
        self.blob: Any = blob
        self.save_count = 0

    def clear(self) -> None:
        self.blob = None
        self.save_count = 0

    async def load(self) -> List[Task]:
        if self.blob is None:
            return []
        tasks = tasks_from_blob(self.blob, "memory")
        if tasks is None:
            self.blob = None
            return []
        return tasks

    async def save(self, tasks: List[Task]) -> None:
        self.blob = [task.to_dict() for task in tasks]
        self.save_count += 1
