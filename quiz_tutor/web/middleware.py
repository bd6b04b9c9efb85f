from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


class LocaleMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.locale = self._detect_locale(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if "text/html" in content_type:
            response.headers["Cache-Control"] = "no-store"

        return response

    def _detect_locale(self, request: Request) -> str:
        i18n = getattr(request.app.state, "i18n", None)
        available = i18n.available_locales() if i18n else []

        cookie_locale = request.cookies.get("locale")
        if cookie_locale and cookie_locale in available:
            return cookie_locale

        accept = request.headers.get("accept-language", "")
        for part in accept.split(","):
            lang = part.split(";")[0].strip().split("-")[0].lower()
            if lang in available:
                return lang

        return request.app.state.config.locale


def configure_cors(app: FastAPI, whitelist: list[str]) -> None:
    # Requests without an Origin header (same-origin) are not affected
    app.add_middleware(
        CORSMiddleware,
        allow_origins=whitelist,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
