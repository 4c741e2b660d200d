from __future__ import annotations
import json
import re
from .base import CompletionProvider

_HANDLE_RE = re.compile(r'"id":"([A-Za-z0-9]+)"')

class MockProvider(CompletionProvider):
    def __init__(self, minutes: int = 30):
        self.minutes = minutes

    def complete(self, prompt: str) -> str:
        """
        Returns the tail of a reply that keeps the prompt order and gives
        every task handle the same estimate.
        """
        items = [
            json.dumps({"id": handle, "minutes": self.minutes})
            for handle in _HANDLE_RE.findall(prompt)
        ]
        return ", ".join(items) + "]}"
