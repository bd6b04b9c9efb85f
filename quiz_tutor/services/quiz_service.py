from __future__ import annotations

import random
from typing import Any

from quiz_tutor.constants import FILTER_ALL
from quiz_tutor.repositories.question_repository import QuestionRepository


def shuffle_options(
    question: dict[str, Any], rng: random.Random | None = None
) -> dict[str, Any]:
    """Return a copy of ``question`` with its options in random order.

    ``correct_answer`` is re-pointed at the position the correct option moved
    to, or -1 when the stored index did not reference an option.
    """
    rng = rng or random.Random()
    options = list(question.get("options") or [])
    indices = list(range(len(options)))
    rng.shuffle(indices)

    correct = question.get("correct_answer")
    new_correct = indices.index(correct) if correct in indices else -1

    return {
        **question,
        "options": [options[index] for index in indices],
        "correct_answer": new_correct,
    }


def filter_questions(
    questions: list[dict[str, Any]],
    search: str | None = None,
    category_id: str | None = None,
    level_id: str | None = None,
) -> list[dict[str, Any]]:
    needle = (search or "").lower()
    category_id = None if category_id in (None, "", FILTER_ALL) else category_id
    level_id = None if level_id in (None, "", FILTER_ALL) else level_id

    result = []
    for question in questions:
        if needle and needle not in str(question.get("text", "")).lower():
            continue
        if category_id is not None and question.get("category_id") != category_id:
            continue
        if level_id is not None and question.get("level_id") != level_id:
            continue
        result.append(question)
    return result


class QuizService:
    def __init__(self, questions: QuestionRepository, rng: random.Random | None = None):
        self.questions = questions
        self.rng = rng or random.Random()

    async def get_quiz_questions(
        self, category_id: str, level_id: str, limit: int | None = None
    ) -> list[dict[str, Any]]:
        questions = await self.questions.list_questions(category_id, level_id)
        if limit is not None and limit < len(questions):
            questions = self.rng.sample(questions, limit)
        return [shuffle_options(question, self.rng) for question in questions]

    async def get_admin_questions(
        self,
        search: str | None = None,
        category_id: str | None = None,
        level_id: str | None = None,
    ) -> list[dict[str, Any]]:
        questions = await self.questions.list_all_questions()
        return filter_questions(
            questions, search=search, category_id=category_id, level_id=level_id
        )
