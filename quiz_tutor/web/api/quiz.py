from __future__ import annotations

import logging
from typing import Annotated, Any

import aiosqlite
from fastapi import HTTPException, Query
from fastapi.routing import APIRouter

from quiz_tutor.constants import API_PREFIX
from quiz_tutor.web.api.schemas import (
    Category,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    ErrorResponse,
    Level,
    MessageResponse,
    Question,
    QuestionCreatedResponse,
    QuestionRequest,
)
from quiz_tutor.web.dependencies import (
    CategoryRepoDep,
    LevelRepoDep,
    QuestionRepoDep,
    QuizServiceDep,
)

logger = logging.getLogger(__name__)

quiz_router = APIRouter(prefix=API_PREFIX)


def _validated_question(payload: QuestionRequest) -> dict[str, Any]:
    if (
        not payload.category_id
        or not payload.level_id
        or not payload.text
        or not payload.options
        or payload.correct_answer is None
    ):
        raise HTTPException(status_code=400, detail="Missing required fields")

    if not 0 <= payload.correct_answer < len(payload.options):
        raise HTTPException(
            status_code=400,
            detail="correct_answer must reference one of the options",
        )

    return {
        "category_id": payload.category_id,
        "level_id": payload.level_id,
        "text": payload.text,
        "options": payload.options,
        "correct_answer": payload.correct_answer,
        "explanation": payload.explanation,
    }


# Quiz content


@quiz_router.get(
    "/categories",
    response_model=list[Category],
    summary="List categories",
    description="Returns all quiz categories ordered by id.",
)
async def list_categories(categories: CategoryRepoDep) -> list[dict[str, Any]]:
    return await categories.list_categories()


@quiz_router.get(
    "/levels",
    response_model=list[Level],
    summary="List difficulty levels",
    description="Returns the difficulty levels ordered from easiest to hardest.",
)
async def list_levels(levels: LevelRepoDep) -> list[dict[str, Any]]:
    return await levels.list_levels()


@quiz_router.get(
    "/questions",
    response_model=list[Question],
    summary="Get quiz questions",
    description=(
        "Returns the questions of one category and level. Answer options are "
        "shuffled on every request and correct_answer points at the shuffled position."
    ),
)
async def get_quiz_questions(
    quiz_service: QuizServiceDep,
    category_id: Annotated[str, Query(alias="categoryId")],
    level_id: Annotated[str, Query(alias="levelId")],
    limit: Annotated[
        int | None, Query(ge=1, description="Maximum number of questions")
    ] = None,
) -> list[dict[str, Any]]:
    return await quiz_service.get_quiz_questions(category_id, level_id, limit=limit)


# Admin: questions


@quiz_router.get(
    "/all-questions",
    response_model=list[Question],
    summary="List all questions",
    description=(
        "Admin listing, newest first. Optional filters are combined with AND; "
        "'all' disables a filter."
    ),
)
async def list_all_questions(
    quiz_service: QuizServiceDep,
    search: Annotated[str | None, Query(description="Case-insensitive text")] = None,
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
    level_id: Annotated[str | None, Query(alias="levelId")] = None,
) -> list[dict[str, Any]]:
    return await quiz_service.get_admin_questions(
        search=search, category_id=category_id, level_id=level_id
    )


@quiz_router.post(
    "/questions",
    status_code=201,
    response_model=QuestionCreatedResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid question"}},
    summary="Create a question",
)
async def create_question(
    payload: QuestionRequest, questions: QuestionRepoDep
) -> dict[str, Any]:
    data = _validated_question(payload)
    try:
        question_id = await questions.create_question(**data)
    except aiosqlite.IntegrityError as exc:
        logger.warning(
            "Rejected question for %s/%s: %s",
            data["category_id"],
            data["level_id"],
            exc,
        )
        raise HTTPException(
            status_code=400, detail="Unknown category or level"
        ) from exc
    return {"message": "Question created", "id": question_id}


@quiz_router.put(
    "/questions/{question_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid question"},
        404: {"model": ErrorResponse, "description": "Question not found"},
    },
    summary="Update a question",
)
async def update_question(
    question_id: int, payload: QuestionRequest, questions: QuestionRepoDep
) -> dict[str, str]:
    data = _validated_question(payload)
    try:
        updated = await questions.update_question(question_id, **data)
    except aiosqlite.IntegrityError as exc:
        raise HTTPException(
            status_code=400, detail="Unknown category or level"
        ) from exc
    if not updated:
        raise HTTPException(status_code=404, detail="Question not found")
    return {"message": "Question updated"}


@quiz_router.delete(
    "/questions/{question_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
    summary="Delete a question",
)
async def delete_question(
    question_id: int, questions: QuestionRepoDep
) -> dict[str, str]:
    if not await questions.delete_question(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    logger.info("Deleted question %s", question_id)
    return {"message": "Question deleted"}


# Admin: categories


@quiz_router.post(
    "/categories",
    status_code=201,
    response_model=MessageResponse,
    responses={409: {"model": ErrorResponse, "description": "Duplicate id"}},
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreateRequest, categories: CategoryRepoDep
) -> dict[str, str]:
    try:
        await categories.create_category(
            payload.id, payload.title, payload.description
        )
    except aiosqlite.IntegrityError as exc:
        raise HTTPException(
            status_code=409, detail=f"Category '{payload.id}' already exists"
        ) from exc
    return {"message": "Category created"}


@quiz_router.put(
    "/categories/{category_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
    summary="Update a category",
)
async def update_category(
    category_id: str, payload: CategoryUpdateRequest, categories: CategoryRepoDep
) -> dict[str, str]:
    updated = await categories.update_category(
        category_id, payload.title, payload.description
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category updated"}


@quiz_router.delete(
    "/categories/{category_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Category is in use"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
    summary="Delete a category",
    description="Categories referenced by questions cannot be deleted.",
)
async def delete_category(
    category_id: str, categories: CategoryRepoDep
) -> dict[str, str]:
    if await categories.is_in_use(category_id):
        raise HTTPException(
            status_code=400, detail="Cannot delete category used in questions"
        )
    if not await categories.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    logger.info("Deleted category %s", category_id)
    return {"message": "Category deleted"}
