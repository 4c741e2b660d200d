"""Flatten Notion content blocks into CommonMark-like text.

Only the block types the task pages actually use are supported. Anything else
is logged and skipped so one odd block never hides the rest of a page.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from prioritizer.errors import UnsupportedBlockError

logger = logging.getLogger(__name__)

# block type -> line prefix
BLOCK_PREFIXES = {
    "paragraph": "",
    "heading_1": "# ",
    "heading_2": "## ",
    "heading_3": "### ",
    "bulleted_list_item": "* ",
}


def rich_text_to_plain(runs: Iterable[dict[str, Any]]) -> str:
    return "".join(run.get("plain_text", "") for run in runs)


def block_to_commonmark(block: dict[str, Any]) -> str:
    block_type = block.get("type")
    if block_type not in BLOCK_PREFIXES:
        raise UnsupportedBlockError(f"unsupported block type: {block_type}")

    body = block.get(block_type) or {}
    return BLOCK_PREFIXES[block_type] + rich_text_to_plain(body.get("rich_text", []))


def blocks_to_commonmark(blocks: Iterable[dict[str, Any]]) -> str:
    lines = []
    for block in blocks:
        try:
            lines.append(block_to_commonmark(block))
        except UnsupportedBlockError as e:
            logger.warning("Skipping block %s: %s", block.get("id", "?"), e)
    return "\n".join(lines)
