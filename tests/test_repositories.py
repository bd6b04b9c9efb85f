from __future__ import annotations

import gc
import sqlite3

import aiosqlite
import pytest

from quiz_tutor.constants import DEFAULT_LEVELS
from quiz_tutor.repositories import (
    CategoryRepository,
    LevelRepository,
    QuestionRepository,
)
from quiz_tutor.repositories.base import BaseDbRepository
from quiz_tutor.repositories.question_repository import _decode_options


async def add_question(question_repo, **overrides) -> int:
    fields = {
        "category_id": "python",
        "level_id": "junior",
        "text": "What is a generator?",
        "options": ["A function", "An iterator", "A class"],
        "correct_answer": 1,
        "explanation": None,
    }
    fields.update(overrides)
    return await question_repo.create_question(**fields)


@pytest.fixture
async def python_category(category_repo):
    await category_repo.create_category("python", "Python", "Core language")
    return "python"


class TestCategoryRepository:
    async def test_create_and_get(self, category_repo):
        await category_repo.create_category("sql", "SQL")

        category = await category_repo.get_category("sql")

        assert category["title"] == "SQL"
        assert category["description"] is None
        assert category["created_at"]

    async def test_get_missing(self, category_repo):
        assert await category_repo.get_category("missing") is None

    async def test_list_ordered_by_id(self, category_repo):
        await category_repo.create_category("sql", "SQL")
        await category_repo.create_category("go", "Go")

        categories = await category_repo.list_categories()

        assert [category["id"] for category in categories] == ["go", "sql"]

    async def test_duplicate_raises(self, category_repo, python_category):
        with pytest.raises(aiosqlite.IntegrityError):
            await category_repo.create_category(python_category, "Again")

    async def test_update(self, category_repo, python_category):
        assert await category_repo.update_category(python_category, "Py", "Short")
        category = await category_repo.get_category(python_category)
        assert (category["title"], category["description"]) == ("Py", "Short")

    async def test_update_missing(self, category_repo):
        assert await category_repo.update_category("missing", "X") is False

    async def test_delete(self, category_repo, python_category):
        assert await category_repo.delete_category(python_category) is True
        assert await category_repo.delete_category(python_category) is False

    async def test_in_use(self, category_repo, question_repo, python_category):
        assert await category_repo.is_in_use(python_category) is False
        await add_question(question_repo)
        assert await category_repo.is_in_use(python_category) is True


class TestLevelRepository:
    async def test_seeded_levels(self, level_repo):
        levels = await level_repo.list_levels()

        assert [
            (level["id"], level["title"], level["order_index"]) for level in levels
        ] == list(DEFAULT_LEVELS)


class TestQuestionRepository:
    async def test_create_and_get(self, question_repo, python_category):
        question_id = await add_question(question_repo, explanation="Lazy iterator")

        question = await question_repo.get_question(question_id)

        assert question["category_id"] == "python"
        assert question["options"] == ["A function", "An iterator", "A class"]
        assert question["correct_answer"] == 1
        assert question["explanation"] == "Lazy iterator"

    async def test_missing_explanation_is_empty_string(
        self, question_repo, python_category
    ):
        question_id = await add_question(question_repo)
        question = await question_repo.get_question(question_id)
        assert question["explanation"] == ""

    async def test_unicode_options_roundtrip(self, question_repo, python_category):
        question_id = await add_question(
            question_repo, options=["Список", "Кортеж"], correct_answer=0
        )
        question = await question_repo.get_question(question_id)
        assert question["options"] == ["Список", "Кортеж"]

    async def test_unknown_category_rejected(self, question_repo):
        with pytest.raises(aiosqlite.IntegrityError):
            await add_question(question_repo, category_id="missing")

    async def test_unknown_level_rejected(self, question_repo, python_category):
        with pytest.raises(aiosqlite.IntegrityError):
            await add_question(question_repo, level_id="guru")

    async def test_list_by_category_and_level(self, question_repo, python_category):
        first = await add_question(question_repo)
        await add_question(question_repo, level_id="senior")
        second = await add_question(question_repo)

        questions = await question_repo.list_questions("python", "junior")

        assert [question["id"] for question in questions] == [first, second]

    async def test_list_all_newest_first(self, question_repo, python_category):
        ids = [await add_question(question_repo) for _ in range(3)]

        questions = await question_repo.list_all_questions()

        assert [question["id"] for question in questions] == list(reversed(ids))

    async def test_update(self, question_repo, python_category):
        question_id = await add_question(question_repo)

        updated = await question_repo.update_question(
            question_id,
            category_id="python",
            level_id="middle",
            text="Updated",
            options=["x", "y"],
            correct_answer=0,
        )

        assert updated is True
        question = await question_repo.get_question(question_id)
        assert question["level_id"] == "middle"
        assert question["options"] == ["x", "y"]

    async def test_update_missing(self, question_repo, python_category):
        updated = await question_repo.update_question(
            42,
            category_id="python",
            level_id="junior",
            text="Nope",
            options=["a"],
            correct_answer=0,
        )
        assert updated is False

    async def test_delete(self, question_repo, python_category):
        question_id = await add_question(question_repo)

        assert await question_repo.delete_question(question_id) is True
        assert await question_repo.get_question(question_id) is None
        assert await question_repo.delete_question(question_id) is False

    async def test_corrupt_options_decoded_as_empty(
        self, question_repo, python_category, db_path
    ):
        question_id = await add_question(question_repo)
        conn = sqlite3.connect(db_path)
        conn.execute(
            "UPDATE questions SET options = ? WHERE id = ?", ("not json", question_id)
        )
        conn.commit()
        conn.close()

        question = await question_repo.get_question(question_id)
        assert question["options"] == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('["a", "b"]', ["a", "b"]),
        ("[1, 2]", ["1", "2"]),
        ('{"a": 1}', []),
        ("", []),
        (None, []),
        ("[", []),
    ],
)
def test_decode_options(raw, expected):
    assert _decode_options(raw) == expected


class TestWriteLocks:
    async def test_repositories_share_lock_per_file(self, db_path, temp_dir):
        categories = CategoryRepository(db_path)
        questions = QuestionRepository(db_path)
        other = CategoryRepository(temp_dir / "other.sqlite")

        assert categories._write_lock is questions._write_lock
        assert categories._write_lock is not other._write_lock

    async def test_lock_released_with_last_repository(self, temp_dir):
        path = temp_dir / "short-lived.sqlite"
        key = str(path.resolve())

        repo = LevelRepository(path)
        assert key in BaseDbRepository._write_locks

        del repo
        gc.collect()

        assert key not in BaseDbRepository._write_locks

    async def test_failed_write_rolls_back(self, category_repo, python_category):
        with pytest.raises(aiosqlite.IntegrityError):
            async with category_repo.write_transaction() as conn:
                await conn.execute(
                    "INSERT INTO categories (id, title) VALUES (?, ?)", ("go", "Go")
                )
                await conn.execute(
                    "INSERT INTO categories (id, title) VALUES (?, ?)",
                    (python_category, "Duplicate"),
                )

        assert await category_repo.get_category("go") is None
