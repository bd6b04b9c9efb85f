from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from quiz_tutor.i18n.manager import TranslationManager
from quiz_tutor.repositories.category_repository import CategoryRepository
from quiz_tutor.repositories.level_repository import LevelRepository
from quiz_tutor.repositories.question_repository import QuestionRepository
from quiz_tutor.services.quiz_service import QuizService
from quiz_tutor.web.config import AppConfig


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_translator(request: Request) -> TranslationManager:
    return request.app.state.i18n


async def get_category_repository(
    config: Annotated[AppConfig, Depends(get_config)],
) -> AsyncGenerator[CategoryRepository]:
    async with CategoryRepository.from_config(config) as repo:
        yield repo


async def get_level_repository(
    config: Annotated[AppConfig, Depends(get_config)],
) -> AsyncGenerator[LevelRepository]:
    async with LevelRepository.from_config(config) as repo:
        yield repo


async def get_question_repository(
    config: Annotated[AppConfig, Depends(get_config)],
) -> AsyncGenerator[QuestionRepository]:
    async with QuestionRepository.from_config(config) as repo:
        yield repo


def get_quiz_service(
    request: Request,
    questions: Annotated[QuestionRepository, Depends(get_question_repository)],
) -> QuizService:
    return QuizService(questions=questions, rng=getattr(request.app.state, "rng", None))


# Type annotations for dependency injection in route handlers
ConfigDep = Annotated[AppConfig, Depends(get_config)]
TranslatorDep = Annotated[TranslationManager, Depends(get_translator)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
LevelRepoDep = Annotated[LevelRepository, Depends(get_level_repository)]
QuestionRepoDep = Annotated[QuestionRepository, Depends(get_question_repository)]
QuizServiceDep = Annotated[QuizService, Depends(get_quiz_service)]
