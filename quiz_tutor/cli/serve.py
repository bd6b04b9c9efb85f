import argparse
from pathlib import Path

import uvicorn

from quiz_tutor import constants
from quiz_tutor.cli.base import CLICommand
from quiz_tutor.web.app import create_app
from quiz_tutor.web.config import AppConfig


class ServeCommand(CLICommand):
    name = "serve"
    help = "Start the quiz API and frontend server"

    def run(self, args: argparse.Namespace, config: AppConfig) -> None:
        app = create_app(config)
        uvicorn.run(app, host=config.server.host, port=config.server.port)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--host",
            default=constants.DEFAULT_SERVER_HOST,
            help="Host to bind the server to",
        )
        parser.add_argument(
            "--port",
            type=int,
            default=None,
            help="Port to bind the server to (defaults to $SERVER_PORT or 5000)",
        )
        parser.add_argument(
            "--static-dir",
            type=Path,
            default=None,
            help="Directory with the built frontend (index.css/index.js under assets/)",
        )
