"""Pytest configuration and shared fixtures for tests."""

from __future__ import annotations

import tempfile
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from quiz_tutor.migrations import run_migrations
from quiz_tutor.repositories.category_repository import CategoryRepository
from quiz_tutor.repositories.level_repository import LevelRepository
from quiz_tutor.repositories.question_repository import QuestionRepository
from quiz_tutor.web.app import create_app
from quiz_tutor.web.config import AdminConfig, AppConfig, DataConfig

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Provide a temporary directory that cleans up after the test."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    path = temp_dir / "test.sqlite"
    run_migrations(path)
    return path


@pytest.fixture
def test_config(db_path: Path, temp_dir: Path) -> AppConfig:
    return AppConfig(
        data=DataConfig(
            db_path=db_path,
            template_dir=Path(__file__).parent.parent / "templates",
            static_dir=temp_dir / "dist",
        ),
        admin=AdminConfig(email=ADMIN_EMAIL, password=ADMIN_PASSWORD),
        cors_whitelist=["http://localhost:5173"],
    )


@pytest.fixture
async def category_repo(db_path: Path) -> AsyncGenerator[CategoryRepository]:
    repo = CategoryRepository(db_path)
    yield repo
    await repo.close()


@pytest.fixture
async def level_repo(db_path: Path) -> AsyncGenerator[LevelRepository]:
    repo = LevelRepository(db_path)
    yield repo
    await repo.close()


@pytest.fixture
async def question_repo(db_path: Path) -> AsyncGenerator[QuestionRepository]:
    repo = QuestionRepository(db_path)
    yield repo
    await repo.close()


@pytest.fixture
def app(test_config: AppConfig) -> Generator[TestClient]:
    fastapi_app = create_app(test_config)
    with TestClient(fastapi_app) as client:
        yield client
