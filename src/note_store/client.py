from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

NOTION_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient:
    """Minimal synchronous client for the Notion REST endpoints the planner reads.

    Only the first page of every listing is returned; the task system is small
    enough that cursors are never followed. HTTP errors propagate to the caller.
    """

    def __init__(
        self,
        token: str,
        base_url: str = NOTION_BASE_URL,
        notion_version: str = NOTION_VERSION,
        timeout_s: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not token:
            raise RuntimeError("Notion token is missing")

        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout_s,
            transport=transport,
        )

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict[str, Any]:
        r = self._http.request(method, path, json=json)
        r.raise_for_status()
        return r.json()

    def get_block_children(self, block_id: str) -> list[dict[str, Any]]:
        data = self._request("GET", f"/blocks/{block_id}/children")
        return data.get("results", [])

    def get_database(self, database_id: str) -> dict[str, Any]:
        return self._request("GET", f"/databases/{database_id}")

    def query_database(self, database_id: str, filter: Optional[dict] = None) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {}
        if filter is not None:
            payload["filter"] = filter

        data = self._request("POST", f"/databases/{database_id}/query", json=payload)
        results = data.get("results", [])
        if data.get("has_more"):
            logger.warning(
                "Database %s has more results than one page; only %d were read",
                database_id,
                len(results),
            )
        return results
