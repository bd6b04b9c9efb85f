from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter

from quiz_tutor.web.api.admin import admin_router
from quiz_tutor.web.api.quiz import quiz_router
from quiz_tutor.web.ui.router import ui_router


def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy"})


def configure_router(app: FastAPI) -> FastAPI:
    router = APIRouter()

    # Health check
    router.add_api_route(
        "/health", health_check, response_class=JSONResponse, methods=["GET"]
    )

    app.include_router(router)
    app.include_router(quiz_router)
    app.include_router(admin_router)
    # SPA fallback catches every remaining GET, so it goes last
    app.include_router(ui_router)
    return app
