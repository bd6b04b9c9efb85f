from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable outcome of the operation")


class Category(BaseModel):
    id: str = Field(description="Category slug")
    title: str = Field(description="Display title")
    description: str | None = Field(None, description="Short description")
    created_at: str | None = Field(None, description="Creation timestamp")


class Level(BaseModel):
    id: str = Field(description="Level slug (junior, middle, senior)")
    title: str = Field(description="Display title")
    order_index: int = Field(description="Sort position, easiest first")
    created_at: str | None = Field(None, description="Creation timestamp")


class Question(BaseModel):
    id: int = Field(description="Question id")
    category_id: str = Field(description="Owning category")
    level_id: str = Field(description="Difficulty level")
    text: str = Field(description="Question text")
    options: list[str] = Field(description="Answer options")
    correct_answer: int = Field(description="Index of the correct option")
    explanation: str = Field("", description="Explanation shown after answering")
    created_at: str | None = Field(None, description="Creation timestamp")


class CategoryCreateRequest(BaseModel):
    id: str = Field(min_length=1, description="Category slug")
    title: str = Field(min_length=1, description="Display title")
    description: str | None = Field(None, description="Short description")


class CategoryUpdateRequest(BaseModel):
    title: str = Field(min_length=1, description="Display title")
    description: str | None = Field(None, description="Short description")


class QuestionRequest(BaseModel):
    """Question payload; required fields are checked by the handler so that
    incomplete submissions get a 400 rather than a schema error."""

    category_id: str | None = None
    level_id: str | None = None
    text: str | None = None
    options: list[str] | None = None
    correct_answer: int | None = None
    explanation: str | None = None


class QuestionCreatedResponse(MessageResponse):
    id: int = Field(description="Id of the new question")


class LoginRequest(BaseModel):
    email: str = Field(description="Admin e-mail")
    password: str = Field(description="Admin password")


class LoginResponse(BaseModel):
    success: bool = Field(description="Whether the credentials matched")
