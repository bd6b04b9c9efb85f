from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic.config import Config

from alembic import command

from quiz_tutor.web.config import get_db_path

logger = logging.getLogger(__name__)


def get_alembic_config(db_path: Path) -> Config:
    alembic_ini = Path(__file__).parent.parent / "alembic.ini"
    config = Config(str(alembic_ini))

    db_path.parent.mkdir(parents=True, exist_ok=True)
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")

    return config


def run_migrations(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)

    config = get_alembic_config(db_path)
    command.upgrade(config, "head")


def main() -> None:
    db_path = get_db_path(os.environ)

    logging.basicConfig(level=logging.INFO)
    logger.info("Running migrations on %s", db_path)
    run_migrations(db_path)
    logger.info("Migrations complete")


if __name__ == "__main__":
    main()
