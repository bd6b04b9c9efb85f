from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from quiz_tutor.i18n.manager import get_translator
from quiz_tutor.migrations import run_migrations
from quiz_tutor.web import routes
from quiz_tutor.web.config import AppConfig, config_factory
from quiz_tutor.web.middleware import LocaleMiddleware, configure_cors

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig,
) -> FastAPI:
    app = FastAPI(title="Quiz Tutor")

    run_migrations(config.data.db_path)

    app.state.config = config
    app.state.templates = Jinja2Templates(directory=str(config.data.template_dir))
    app.state.i18n = get_translator()

    # Built frontend bundle, when present
    assets_dir = config.data.static_dir / "assets"
    if assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=str(assets_dir)), name="assets")
    else:
        logger.info("No frontend assets found in %s", assets_dir)

    app.add_middleware(LocaleMiddleware)
    configure_cors(app, config.cors_whitelist)
    app = routes.configure_router(app)
    return app


def create_app_factory() -> FastAPI:
    """Factory function for uvicorn --factory mode."""
    return create_app(config_factory(None, os.environ))
