"""
History and favorites storage.

Two backends share the :class:`Storage` interface: :class:`MemStorage`, a
volatile in-process store, and :class:`RedisStorage`. The application builds
one at startup and hands it to the routes; nothing here is a module-level
instance.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as redis

from sosgen.models import (
    Favorite,
    InsertFavorite,
    InsertMessageHistory,
    MessageHistory,
)


def _generate_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _matches(message: MessageHistory, query: str) -> bool:
    needle = query.lower()
    return (
        needle in message.natural_input.lower()
        or needle in message.spanish_message.lower()
        or needle in message.english_message.lower()
    )


class _RecordLock:
    """A lock plus the number of tasks holding or waiting for it."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class Storage(ABC):
    """Persistence for generated messages and favorite templates."""

    def __init__(self):
        # Mutations on one record id are serialized; different ids never wait on each other.
        # Entries only live while some task holds or waits for them.
        self._locks: dict[str, _RecordLock] = {}

    @asynccontextmanager
    async def _lock(self, record_id: str):
        entry = self._locks.get(record_id)
        if entry is None:
            entry = self._locks[record_id] = _RecordLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if not entry.users:
                del self._locks[record_id]

    @abstractmethod
    async def save_message_to_history(self, message: InsertMessageHistory) -> MessageHistory:
        ...

    @abstractmethod
    async def get_message_history(self, limit: int = 50, offset: int = 0) -> list[MessageHistory]:
        """History records, newest first."""
        ...

    @abstractmethod
    async def search_message_history(self, query: str) -> list[MessageHistory]:
        """Case-insensitive search over the input and both messages, newest first."""
        ...

    @abstractmethod
    async def toggle_message_favorite(self, message_id: str) -> Optional[MessageHistory]:
        """Flip the favorite flag. Returns None for an unknown id."""
        ...

    @abstractmethod
    async def add_to_favorites(self, favorite: InsertFavorite) -> Favorite:
        ...

    @abstractmethod
    async def get_favorites(self) -> list[Favorite]:
        """Favorites, newest first."""
        ...

    @abstractmethod
    async def delete_favorite(self, favorite_id: str) -> bool:
        """Remove a favorite. Returns False for an unknown id."""
        ...


class MemStorage(Storage):
    """In-memory store. Contents are lost on restart."""

    def __init__(self):
        super().__init__()
        self._history: dict[str, MessageHistory] = {}
        self._favorites: dict[str, Favorite] = {}

    async def save_message_to_history(self, message: InsertMessageHistory) -> MessageHistory:
        record = MessageHistory(
            **message.model_dump(),
            id=_generate_id(),
            created_at=_now()
        )
        self._history[record.id] = record
        return record

    def _sorted_history(self) -> list[MessageHistory]:
        return sorted(self._history.values(), key=lambda m: m.created_at, reverse=True)

    async def get_message_history(self, limit: int = 50, offset: int = 0) -> list[MessageHistory]:
        return self._sorted_history()[offset:offset + limit]

    async def search_message_history(self, query: str) -> list[MessageHistory]:
        return [m for m in self._sorted_history() if _matches(m, query)]

    async def toggle_message_favorite(self, message_id: str) -> Optional[MessageHistory]:
        async with self._lock(message_id):
            message = self._history.get(message_id)
            if message is None:
                return None
            message.is_favorite = not message.is_favorite
            return message

    async def add_to_favorites(self, favorite: InsertFavorite) -> Favorite:
        record = Favorite(
            **favorite.model_dump(),
            id=_generate_id(),
            created_at=_now()
        )
        self._favorites[record.id] = record
        return record

    async def get_favorites(self) -> list[Favorite]:
        return sorted(self._favorites.values(), key=lambda f: f.created_at, reverse=True)

    async def delete_favorite(self, favorite_id: str) -> bool:
        async with self._lock(favorite_id):
            return self._favorites.pop(favorite_id, None) is not None


class RedisStorage(Storage):
    """
    Redis-backed store.

    Records are JSON strings under ``history:{id}`` / ``favorite:{id}``; a
    sorted set per collection, scored by creation time, keeps the ordering.
    """

    HISTORY_INDEX = "history:index"
    FAVORITES_INDEX = "favorites:index"

    def __init__(self, client: redis.Redis, ttl: Optional[int] = None):
        super().__init__()
        self.redis = client
        self.ttl = ttl

    def _queue_write(self, pipe, key: str, value: str) -> None:
        if self.ttl:
            pipe.setex(key, self.ttl, value)
        else:
            pipe.set(key, value)

    async def _write(self, key: str, value: str) -> None:
        if self.ttl:
            await self.redis.setex(key, self.ttl, value)
        else:
            await self.redis.set(key, value)

    async def _insert(self, index: str, key: str, record_id: str, value: str, score: float) -> None:
        """Write a record and its index entry in one transaction."""
        async with self.redis.pipeline(transaction=True) as pipe:
            self._queue_write(pipe, key, value)
            pipe.zadd(index, {record_id: score})
            await pipe.execute()

    async def _load(self, index: str, prefix: str, ids: list[str]) -> list[str]:
        """Fetch records for ``ids`` in order, dropping index entries whose record expired."""
        if not ids:
            return []
        rows = await self.redis.mget([f"{prefix}:{i}" for i in ids])
        stale = [i for i, row in zip(ids, rows) if not row]
        if stale:
            await self.redis.zrem(index, *stale)
        return [row for row in rows if row]

    async def _load_history(self, ids: list[str]) -> list[MessageHistory]:
        rows = await self._load(self.HISTORY_INDEX, "history", ids)
        return [MessageHistory.model_validate_json(row) for row in rows]

    async def save_message_to_history(self, message: InsertMessageHistory) -> MessageHistory:
        record = MessageHistory(
            **message.model_dump(),
            id=_generate_id(),
            created_at=_now()
        )
        await self._insert(
            self.HISTORY_INDEX,
            f"history:{record.id}",
            record.id,
            record.model_dump_json(),
            record.created_at.timestamp()
        )
        return record

    async def get_message_history(self, limit: int = 50, offset: int = 0) -> list[MessageHistory]:
        if limit <= 0:
            return []
        ids = await self.redis.zrevrange(self.HISTORY_INDEX, offset, offset + limit - 1)
        return await self._load_history(ids)

    async def search_message_history(self, query: str) -> list[MessageHistory]:
        ids = await self.redis.zrevrange(self.HISTORY_INDEX, 0, -1)
        return [m for m in await self._load_history(ids) if _matches(m, query)]

    async def toggle_message_favorite(self, message_id: str) -> Optional[MessageHistory]:
        async with self._lock(message_id):
            data = await self.redis.get(f"history:{message_id}")
            if not data:
                return None

            message = MessageHistory.model_validate_json(data)
            message.is_favorite = not message.is_favorite
            await self._write(f"history:{message_id}", message.model_dump_json())
            return message

    async def add_to_favorites(self, favorite: InsertFavorite) -> Favorite:
        record = Favorite(
            **favorite.model_dump(),
            id=_generate_id(),
            created_at=_now()
        )
        await self._insert(
            self.FAVORITES_INDEX,
            f"favorite:{record.id}",
            record.id,
            record.model_dump_json(),
            record.created_at.timestamp()
        )
        return record

    async def get_favorites(self) -> list[Favorite]:
        ids = await self.redis.zrevrange(self.FAVORITES_INDEX, 0, -1)
        rows = await self._load(self.FAVORITES_INDEX, "favorite", ids)
        return [Favorite.model_validate_json(row) for row in rows]

    async def delete_favorite(self, favorite_id: str) -> bool:
        async with self._lock(favorite_id):
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.zrem(self.FAVORITES_INDEX, favorite_id)
                pipe.delete(f"favorite:{favorite_id}")
                _, deleted = await pipe.execute()
            return bool(deleted)
