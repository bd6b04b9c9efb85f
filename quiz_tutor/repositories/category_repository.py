from __future__ import annotations

from typing import Any

from quiz_tutor.repositories.base import BaseDbRepository


class CategoryRepository(BaseDbRepository):
    async def list_categories(self) -> list[dict[str, Any]]:
        rows = await self.fetch_all(
            "SELECT id, title, description, created_at FROM categories ORDER BY id"
        )
        return [dict(row) for row in rows]

    async def get_category(self, category_id: str) -> dict[str, Any] | None:
        row = await self.fetch_one(
            "SELECT id, title, description, created_at FROM categories WHERE id = ?",
            (category_id,),
        )
        return dict(row) if row else None

    async def create_category(
        self, category_id: str, title: str, description: str | None = None
    ) -> None:
        """Insert a new category.

        Raises:
            aiosqlite.IntegrityError: if a category with this id already exists.
        """
        await self.execute_write(
            "INSERT INTO categories (id, title, description) VALUES (?, ?, ?)",
            (category_id, title, description),
        )

    async def update_category(
        self, category_id: str, title: str, description: str | None = None
    ) -> bool:
        cursor = await self.execute_write(
            "UPDATE categories SET title = ?, description = ? WHERE id = ?",
            (title, description, category_id),
        )
        return cursor.rowcount > 0

    async def is_in_use(self, category_id: str) -> bool:
        row = await self.fetch_one(
            "SELECT id FROM questions WHERE category_id = ? LIMIT 1", (category_id,)
        )
        return row is not None

    async def delete_category(self, category_id: str) -> bool:
        cursor = await self.execute_write(
            "DELETE FROM categories WHERE id = ?", (category_id,)
        )
        return cursor.rowcount > 0
