from __future__ import annotations

from pathlib import Path

import aiosqlite


async def _connect_async(db_path: Path) -> aiosqlite.Connection:
    """Open an aiosqlite connection configured for concurrent access.

    WAL mode allows readers alongside the single writer, and the busy
    timeout lets a request wait for a concurrent write instead of failing
    with ``database is locked``.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path_str = str(db_path)

    conn = await aiosqlite.connect(db_path_str, timeout=30.0)
    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA journal_mode=WAL;")
    await conn.execute("PRAGMA synchronous=NORMAL;")
    await conn.execute("PRAGMA busy_timeout=30000;")
    await conn.execute("PRAGMA foreign_keys=ON;")

    return conn
