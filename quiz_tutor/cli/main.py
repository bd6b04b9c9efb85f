import argparse
import logging
import os
from pathlib import Path

from quiz_tutor.cli.export import ExportCommand
from quiz_tutor.cli.migrate import MigrateCommand
from quiz_tutor.cli.serve import ServeCommand
from quiz_tutor.web.config import config_factory

COMMANDS = [
    ServeCommand(),
    MigrateCommand(),
    ExportCommand(),
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quiz-tutor")
    parser.add_argument(
        "--db-path",
        type=Path,
        default=None,
        help="SQLite database file (defaults to $QUIZ_TUTOR_DB_PATH or data/quiz.sqlite3)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command in COMMANDS:
        command.register_subparser(subparsers=subparsers)

    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    application_config = config_factory(args, os.environ)

    for command in COMMANDS:
        if command.should_run(args):
            return command.run(args, application_config)

    parser.print_help()


if __name__ == "__main__":
    main()
