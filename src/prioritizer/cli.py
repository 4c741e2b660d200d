"""Command-line entry point: prioritize open Notion tasks and print the result."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import httpx

from api.backend import BackendAPI
from llm.llm_client import LLMClient, build_provider
from note_store.client import NotionClient
from prioritizer.config import Settings
from prioritizer.errors import PlannerError
from prioritizer.models import PrioritizedTask

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="task-prioritizer",
        description="Order open Notion tasks and estimate their duration with an LLM.",
    )
    parser.add_argument(
        "--output",
        choices=("stdout", "log"),
        default="stdout",
        help="print the JSON list to stdout, or emit it as a log line",
    )
    return parser.parse_args(argv)


def render(tasks: list[PrioritizedTask]) -> str:
    return json.dumps([t.model_dump(mode="json") for t in tasks], indent=2)


def run(settings: Settings) -> list[PrioritizedTask]:
    with NotionClient(
        settings.notion_token,
        base_url=settings.notion_base_url,
        notion_version=settings.notion_version,
    ) as notion:
        backend = BackendAPI(
            notion=notion,
            llm_client=LLMClient(provider=build_provider(settings)),
            root_page_id=settings.notion_root_page,
        )
        return backend.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = Settings.from_env()
        logging.getLogger().setLevel(settings.log_level)
        tasks = run(settings)
    except (PlannerError, httpx.HTTPError) as e:
        logger.error(f"Prioritization failed: {e}")
        return 1

    if args.output == "log":
        logger.info("prioritized tasks: %s", render(tasks))
    else:
        print(render(tasks))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
