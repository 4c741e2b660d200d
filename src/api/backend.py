from __future__ import annotations

import logging
import random
import time
from datetime import timedelta
from typing import Dict, Iterable, Optional

from api.metrics import (
    COMPLETION_LATENCY_SECONDS,
    RUNS_TOTAL,
    TASKS_FETCHED_TOTAL,
    TASKS_SCHEDULED_TOTAL,
)
from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient
from llm.schemas import PrioritizeReply, PrioritizeRequest, PrioritizeRequestTask
from note_store.client import NotionClient
from prioritizer.anonymizer import anonymize
from prioritizer.errors import DecodeError
from prioritizer.models import PrioritizedTask, Task

logger = logging.getLogger(__name__)


def resolve_reply(reply: PrioritizeReply, mapping: Dict[str, Task]) -> list[PrioritizedTask]:
    """Map the model's handles back to tasks, keeping the model's order."""
    out = []
    for item in reply.tasks:
        task = mapping.get(item.id)
        if task is None:
            raise DecodeError(f"reply references unknown task id {item.id!r}")
        out.append(
            PrioritizedTask(**task.model_dump(), duration=timedelta(minutes=item.minutes))
        )
    return out


def drop_parent_tasks(tasks: Iterable[PrioritizedTask]) -> list[PrioritizedTask]:
    # parents are scheduled through their subitems
    return [t for t in tasks if not t.is_parent]


class BackendAPI:
    """Central orchestration component: Notion tasks in, ordered estimates out."""

    def __init__(
        self,
        notion: NotionClient,
        llm_client: LLMClient,
        root_page_id: str,
        rng: Optional[random.Random] = None,
    ):
        self.extractor = TaskExtractor(notion)
        self.llm_client = llm_client
        self.root_page_id = root_page_id
        self.rng = rng

    def run(self) -> list[PrioritizedTask]:
        try:
            result = self._run()
        except Exception:
            RUNS_TOTAL.labels(status="failed").inc()
            raise
        RUNS_TOTAL.labels(status="ok").inc()
        return result

    def _run(self) -> list[PrioritizedTask]:
        # 1. Resolve the task system databases
        dbs = self.extractor.discover_databases(self.root_page_id)

        # 2-3. Fetch and parse open tasks
        tasks = self.extractor.extract_open_tasks(dbs.tasks)
        TASKS_FETCHED_TOTAL.inc(len(tasks))

        # 4. Hide page ids behind short handles
        mapping = anonymize(tasks, rng=self.rng)

        # 5. Ask the model for an order and estimates
        request = PrioritizeRequest(
            daily_focus="",
            tasks=[
                PrioritizeRequestTask(id=handle, name=t.name, notes=t.notes)
                for handle, t in mapping.items()
            ],
        )
        start = time.time()
        reply = self.llm_client.prioritize(request)
        COMPLETION_LATENCY_SECONDS.observe(time.time() - start)

        # 6-7. Rehydrate and drop parents
        prioritized = drop_parent_tasks(resolve_reply(reply, mapping))
        TASKS_SCHEDULED_TOTAL.inc(len(prioritized))

        logger.info(f"Prioritized {len(prioritized)} of {len(tasks)} open tasks")
        return prioritized
