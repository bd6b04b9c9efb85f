from __future__ import annotations

import argparse
import typing
from pathlib import Path

from pydantic import BaseModel, Field

from quiz_tutor import constants


class DataConfig(BaseModel):
    db_path: Path = constants.DEFAULT_DB_PATH
    template_dir: Path = constants.TEMPLATES_PATH
    static_dir: Path = constants.DEFAULT_STATIC_PATH


class ServerConfig(BaseModel):
    host: str = constants.DEFAULT_SERVER_HOST
    port: int = constants.DEFAULT_SERVER_PORT


class AdminConfig(BaseModel):
    email: str | None = None
    password: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.email and self.password)


class AppConfig(BaseModel):
    data: DataConfig = DataConfig()
    server: ServerConfig = ServerConfig()
    admin: AdminConfig = AdminConfig()
    cors_whitelist: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_CORS_WHITELIST)
    )
    locale: str = constants.DEFAULT_LOCALE


def parse_cors_whitelist(value: str | None) -> list[str]:
    origins = [origin.strip() for origin in (value or "").split(",")]
    origins = [origin for origin in origins if origin]
    if not origins:
        return list(constants.DEFAULT_CORS_WHITELIST)
    return origins


def get_db_path(environ: typing.Mapping) -> Path:
    db_path = environ.get("QUIZ_TUTOR_DB_PATH")
    if db_path:
        return Path(db_path)
    return constants.DEFAULT_DB_PATH


def get_server_port(environ: typing.Mapping) -> int:
    port = environ.get("SERVER_PORT")
    if port is None or port == "":
        return constants.DEFAULT_SERVER_PORT
    try:
        return int(port)
    except ValueError:
        raise ValueError(
            f"SERVER_PORT must be an integer, got {port!r}"
        ) from None


def config_factory(
    parsed_args: argparse.Namespace | None, environ: typing.Mapping
) -> AppConfig:
    db_path = (
        parsed_args and getattr(parsed_args, "db_path", None) or get_db_path(environ)
    )
    port = parsed_args and getattr(parsed_args, "port", None) or get_server_port(
        environ
    )
    host = (
        parsed_args
        and getattr(parsed_args, "host", None)
        or constants.DEFAULT_SERVER_HOST
    )
    static_dir = (
        parsed_args
        and getattr(parsed_args, "static_dir", None)
        or constants.DEFAULT_STATIC_PATH
    )
    return AppConfig(
        data=DataConfig(db_path=db_path, static_dir=static_dir),
        server=ServerConfig(host=host, port=port),
        admin=AdminConfig(
            email=environ.get("ADMIN_EMAIL") or None,
            password=environ.get("ADMIN_PASSWORD") or None,
        ),
        cors_whitelist=parse_cors_whitelist(environ.get("CORS_WHITELIST")),
        locale=environ.get("QUIZ_TUTOR_LOCALE") or constants.DEFAULT_LOCALE,
    )
