from __future__ import annotations
import os
from typing import Optional
import httpx
from .base import COMPLETION_PARAMS, CompletionProvider

class OllamaProvider(CompletionProvider):
    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.model = (model or os.getenv("OLLAMA_MODEL", "llama3.1")).strip()
        self.base_url = (base_url or os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")).strip()
        self._transport = transport

    def complete(self, prompt: str) -> str:
        url = f"{self.base_url.rstrip('/')}/api/generate"
        # raw mode: no chat template, the prompt is continued as-is
        payload = {
            "model": self.model,
            "prompt": prompt,
            "raw": True,
            "stream": False,
            "options": {
                "temperature": COMPLETION_PARAMS["temperature"],
                "num_predict": COMPLETION_PARAMS["max_tokens"],
                "stop": COMPLETION_PARAMS["stop"],
            },
        }

        with httpx.Client(timeout=60.0, transport=self._transport) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["response"]
