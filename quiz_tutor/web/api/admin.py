from __future__ import annotations

import secrets

from fastapi import HTTPException
from fastapi.routing import APIRouter

from quiz_tutor.constants import API_PREFIX
from quiz_tutor.web.api.schemas import ErrorResponse, LoginRequest, LoginResponse
from quiz_tutor.web.dependencies import ConfigDep

admin_router = APIRouter(prefix=API_PREFIX)


@admin_router.post(
    "/admin/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Admin login disabled"},
    },
    summary="Check admin credentials",
    description="Compares the submitted credentials with ADMIN_EMAIL / ADMIN_PASSWORD.",
)
async def admin_login(payload: LoginRequest, config: ConfigDep) -> dict[str, bool]:
    admin = config.admin
    if not admin.enabled:
        raise HTTPException(status_code=403, detail="Admin login is not configured")

    email_ok = secrets.compare_digest(payload.email.encode(), admin.email.encode())
    password_ok = secrets.compare_digest(
        payload.password.encode(), admin.password.encode()
    )
    if not (email_ok and password_ok):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"success": True}
