"""Repository layer for quiz content stored in SQLite."""

from quiz_tutor.repositories.category_repository import CategoryRepository
from quiz_tutor.repositories.level_repository import LevelRepository
from quiz_tutor.repositories.question_repository import QuestionRepository

__all__ = ["CategoryRepository", "LevelRepository", "QuestionRepository"]
