from __future__ import annotations

import os
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context

config = context.config

if config.config_file_name is not None:
    # Keep application loggers alive when migrations run inside the app process
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def get_database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url

    db_path = os.environ.get("QUIZ_TUTOR_DB_PATH")
    if db_path:
        return f"sqlite:///{db_path}"

    default_path = Path("data/quiz.sqlite3")
    return f"sqlite:///{default_path}"


def run_migrations_offline() -> None:
    url = get_database_url()
    context.configure(
        url=url,
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = get_database_url()
    connectable = create_engine(
        url,
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=None,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
