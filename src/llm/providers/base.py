from __future__ import annotations
from abc import ABC, abstractmethod

# one candidate, deterministic, single line, no prompt echo
COMPLETION_PARAMS = {
    "n": 1,
    "max_tokens": 512,
    "temperature": 0,
    "stop": ["\n"],
    "echo": False,
}

class CompletionProvider(ABC):
    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Must return the text of the first completion candidate for `prompt`.
        """
        raise NotImplementedError
