from __future__ import annotations

import asyncio
import weakref
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Self

import aiosqlite

from quiz_tutor.db import _connect_async
from quiz_tutor.web.config import AppConfig


class BaseDbRepository:
    """One lazily opened connection per repository; writes to the same
    database file are serialized across repositories.

    A write lock lives only as long as some repository for its file does.
    """

    _write_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
        weakref.WeakValueDictionary()
    )

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._write_lock = self._shared_write_lock(db_path)

    @classmethod
    def _shared_write_lock(cls, db_path: Path) -> asyncio.Lock:
        key = str(db_path.resolve())
        lock = cls._write_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            cls._write_locks[key] = lock
        return lock

    async def get_connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            self._conn = await _connect_async(self.db_path)
        return self._conn

    async def fetch_all(
        self, sql: str, params: Iterable[Any] = ()
    ) -> list[aiosqlite.Row]:
        conn = await self.get_connection()
        async with conn.execute(sql, tuple(params)) as cursor:
            return list(await cursor.fetchall())

    async def fetch_one(
        self, sql: str, params: Iterable[Any] = ()
    ) -> aiosqlite.Row | None:
        conn = await self.get_connection()
        async with conn.execute(sql, tuple(params)) as cursor:
            return await cursor.fetchone()

    @asynccontextmanager
    async def write_transaction(self) -> AsyncGenerator[aiosqlite.Connection]:
        async with self._write_lock:
            conn = await self.get_connection()
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def execute_write(
        self, sql: str, params: Iterable[Any] = ()
    ) -> aiosqlite.Cursor:
        """Run one statement in its own transaction; the cursor exposes
        ``rowcount`` and ``lastrowid``."""
        async with self.write_transaction() as conn:
            return await conn.execute(sql, tuple(params))

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @classmethod
    def from_config(cls, config: AppConfig) -> Self:
        return cls(db_path=config.data.db_path)
