"""Repository for quiz questions."""

from __future__ import annotations

import json
from typing import Any

from quiz_tutor.repositories.base import BaseDbRepository

_QUESTION_COLUMNS = """
    id, category_id, level_id, text, options, correct_answer,
    explanation, created_at
"""


def _decode_options(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        options = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(options, list):
        return []
    return [str(option) for option in options]


def _row_to_question(row) -> dict[str, Any]:
    question = dict(row)
    question["options"] = _decode_options(question["options"])
    question["explanation"] = question["explanation"] or ""
    return question


class QuestionRepository(BaseDbRepository):
    async def list_questions(
        self, category_id: str, level_id: str
    ) -> list[dict[str, Any]]:
        rows = await self.fetch_all(
            f"""
            SELECT {_QUESTION_COLUMNS}
            FROM questions
            WHERE category_id = ? AND level_id = ?
            ORDER BY id
            """,
            (category_id, level_id),
        )
        return [_row_to_question(row) for row in rows]

    async def list_all_questions(self) -> list[dict[str, Any]]:
        """All questions, newest first."""
        rows = await self.fetch_all(
            f"""
            SELECT {_QUESTION_COLUMNS}
            FROM questions
            ORDER BY created_at DESC, id DESC
            """
        )
        return [_row_to_question(row) for row in rows]

    async def get_question(self, question_id: int) -> dict[str, Any] | None:
        row = await self.fetch_one(
            f"SELECT {_QUESTION_COLUMNS} FROM questions WHERE id = ?", (question_id,)
        )
        return _row_to_question(row) if row else None

    async def create_question(
        self,
        category_id: str,
        level_id: str,
        text: str,
        options: list[str],
        correct_answer: int,
        explanation: str | None = None,
    ) -> int:
        """Insert a question and return its id.

        Raises:
            aiosqlite.IntegrityError: if the category or level does not exist.
        """
        cursor = await self.execute_write(
            """
            INSERT INTO questions
                (category_id, level_id, text, options, correct_answer, explanation)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                category_id,
                level_id,
                text,
                json.dumps(options, ensure_ascii=False),
                correct_answer,
                explanation or None,
            ),
        )
        return cursor.lastrowid

    async def update_question(
        self,
        question_id: int,
        category_id: str,
        level_id: str,
        text: str,
        options: list[str],
        correct_answer: int,
        explanation: str | None = None,
    ) -> bool:
        cursor = await self.execute_write(
            """
            UPDATE questions SET
                category_id = ?,
                level_id = ?,
                text = ?,
                options = ?,
                correct_answer = ?,
                explanation = ?
            WHERE id = ?
            """,
            (
                category_id,
                level_id,
                text,
                json.dumps(options, ensure_ascii=False),
                correct_answer,
                explanation or None,
                question_id,
            ),
        )
        return cursor.rowcount > 0

    async def delete_question(self, question_id: int) -> bool:
        cursor = await self.execute_write(
            "DELETE FROM questions WHERE id = ?", (question_id,)
        )
        return cursor.rowcount > 0
