from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from pydantic import ValidationError

from note_store.client import NotionClient
from note_store.markup import blocks_to_commonmark, rich_text_to_plain
from prioritizer.errors import ConfigurationError, NoOpenTasksError, SchemaMismatchError
from prioritizer.models import Task, TaskSystemDatabases

logger = logging.getLogger(__name__)

DATABASE_NAMES = ("issues", "threads", "tasks")

# Open = not exited, and none of the related threads is exited.
OPEN_TASKS_FILTER = {
    "and": [
        {"property": "exited", "checkbox": {"equals": False}},
        {
            "property": "thread/exited",
            "rollup": {"none": {"checkbox": {"equals": True}}},
        },
    ]
}


def _expect(name: str, prop: dict[str, Any], expected: str) -> Any:
    if prop.get("type") != expected:
        raise SchemaMismatchError(f"{name} property is not a {expected}")
    return prop.get(expected)


def _decode_name(prop: dict[str, Any]) -> dict[str, Any]:
    return {"name": rich_text_to_plain(_expect("name", prop, "title") or [])}


def _relation_ids(name: str, prop: dict[str, Any]) -> list[str]:
    ids = []
    for related in _expect(name, prop, "relation") or []:
        if not isinstance(related, dict) or not related.get("id"):
            raise SchemaMismatchError(f"{name} relation entry has no id")
        ids.append(related["id"])
    return ids


def _decode_parent(prop: dict[str, Any]) -> dict[str, Any]:
    ids = _relation_ids("parent", prop)
    # optional field
    return {"parent": ids[0] if ids else ""}


def _decode_subitems(prop: dict[str, Any]) -> dict[str, Any]:
    return {"subitems": _relation_ids("subitems", prop)}


def _decode_exited(prop: dict[str, Any]) -> dict[str, Any]:
    return {"exited": bool(_expect("exited", prop, "checkbox"))}


PROPERTY_DECODERS: Dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "name": _decode_name,
    "parent": _decode_parent,
    "subitems": _decode_subitems,
    "exited": _decode_exited,
}


class TaskExtractor:
    """Reads the task system out of a Notion workspace."""

    def __init__(self, notion: NotionClient):
        self.notion = notion

    def discover_databases(self, root_page_id: str) -> TaskSystemDatabases:
        """Locate the issues/threads/tasks databases under the root page.

        The databases live inside the first toggle block on the root page.
        """
        toggle = next(
            (b for b in self.notion.get_block_children(root_page_id) if b.get("type") == "toggle"),
            None,
        )
        if toggle is None:
            raise ConfigurationError("toggle not found")

        found: dict[str, str] = {}
        for child in self.notion.get_block_children(toggle["id"]):
            if child.get("type") != "child_database":
                continue
            db = self.notion.get_database(child["id"])
            title = db.get("title") or []
            name = title[0].get("plain_text", "") if title else ""
            if name in DATABASE_NAMES:
                found[name] = child["id"]

        for name in DATABASE_NAMES:
            if not found.get(name):
                raise ConfigurationError(f"{name} database not found")

        logger.info(f"Resolved task databases under root page {root_page_id}")
        return TaskSystemDatabases(root=root_page_id, **found)

    def fetch_open_tasks(self, database_id: str) -> list[dict[str, Any]]:
        return self.notion.query_database(database_id, filter=OPEN_TASKS_FILTER)

    def fetch_all_tasks(self, database_id: str) -> list[dict[str, Any]]:
        return self.notion.query_database(database_id)

    def page_notes(self, page_id: str) -> str:
        return blocks_to_commonmark(self.notion.get_block_children(page_id))

    def parse_task(self, page: dict[str, Any]) -> Task:
        fields: dict[str, Any] = {
            "id": page["id"],
            "created": page.get("created_time"),
            "updated": page.get("last_edited_time"),
        }

        for name, prop in (page.get("properties") or {}).items():
            decode = PROPERTY_DECODERS.get(name)
            if decode is not None:
                fields.update(decode(prop))

        fields["notes"] = self.page_notes(page["id"])
        try:
            return Task(**fields)
        except ValidationError as e:
            raise SchemaMismatchError(f"task {page['id']} does not match the task schema: {e}") from e

    def extract_open_tasks(self, database_id: str) -> list[Task]:
        records = self.fetch_open_tasks(database_id)
        if not records:
            raise NoOpenTasksError("failed to get open tasks: query returned no results")

        logger.info(f"Fetched {len(records)} open task records")
        return [self.parse_task(r) for r in records]
