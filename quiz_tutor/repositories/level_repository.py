from __future__ import annotations

from typing import Any

from quiz_tutor.repositories.base import BaseDbRepository


class LevelRepository(BaseDbRepository):
    async def list_levels(self) -> list[dict[str, Any]]:
        rows = await self.fetch_all(
            "SELECT id, title, order_index, created_at FROM levels ORDER BY order_index"
        )
        return [dict(row) for row in rows]
