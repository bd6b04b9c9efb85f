import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from quiz_tutor.cli.base import CLICommand, non_negative_int
from quiz_tutor.client.errors import ClassifiedError
from quiz_tutor.client.quiz_client import QuizClient
from quiz_tutor.client.resilience import RetryConfig
from quiz_tutor.web.config import AppConfig

logger = logging.getLogger(__name__)


async def export_question_bank(client: QuizClient) -> dict[str, Any]:
    categories = await client.get_categories()
    levels = await client.get_levels()
    questions = await client.get_all_questions()
    return {"categories": categories, "levels": levels, "questions": questions}


class ExportCommand(CLICommand):
    name = "export"
    help = "Dump the question bank of a running server as JSON"

    def run(self, args: argparse.Namespace, config: AppConfig) -> None:
        retry_config = RetryConfig(
            max_retries=args.max_retries, disable_retry=args.no_retry
        )
        try:
            bank = asyncio.run(self._export(args.base_url, retry_config, config))
        except ClassifiedError as exc:
            logger.error(
                "Export failed (%s, status=%s): %s",
                exc.kind.value,
                exc.status_code,
                exc.message,
            )
            raise SystemExit(1) from exc

        payload = json.dumps(bank, ensure_ascii=False, indent=2)
        if args.output is None:
            print(payload)
        else:
            args.output.write_text(payload, encoding="utf-8")
            logger.info(
                "Exported %d questions in %d categories to %s",
                len(bank["questions"]),
                len(bank["categories"]),
                args.output,
            )

    async def _export(
        self, base_url: str, retry_config: RetryConfig, config: AppConfig
    ) -> dict[str, Any]:
        async with QuizClient(
            base_url, retry_config=retry_config, locale=config.locale
        ) as client:
            return await export_question_bank(client)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--base-url",
            default="http://localhost:5000",
            help="Server address",
        )
        parser.add_argument(
            "--output",
            type=Path,
            default=None,
            help="Output file (stdout when omitted)",
        )
        parser.add_argument(
            "--max-retries",
            type=non_negative_int,
            default=3,
            help="Retries for transient failures",
        )
        parser.add_argument(
            "--no-retry",
            action="store_true",
            help="Fail on the first error",
        )
