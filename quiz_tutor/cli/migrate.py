import argparse
import logging

from quiz_tutor.cli.base import CLICommand
from quiz_tutor.migrations import run_migrations
from quiz_tutor.web.config import AppConfig

logger = logging.getLogger(__name__)


class MigrateCommand(CLICommand):
    name = "migrate"
    help = "Create or upgrade the quiz database schema"

    def run(self, args: argparse.Namespace, config: AppConfig) -> None:
        logger.info("Running migrations on %s", config.data.db_path)
        run_migrations(config.data.db_path)
        logger.info("Migrations complete")
