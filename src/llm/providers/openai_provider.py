from __future__ import annotations
import os
from typing import Optional
import httpx
from prioritizer.errors import DecodeError
from .base import COMPLETION_PARAMS, CompletionProvider

class OpenAIProvider(CompletionProvider):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = (api_key or os.getenv("OPENAI_API_KEY", "")).strip()
        self.model = (model or os.getenv("OPENAI_MODEL", "gpt-3.5-turbo-instruct")).strip()
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")).strip()
        self._transport = transport

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")

    def complete(self, prompt: str) -> str:
        url = f"{self.base_url.rstrip('/')}/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"model": self.model, "prompt": prompt, **COMPLETION_PARAMS}

        with httpx.Client(timeout=30.0, transport=self._transport) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        choices = data.get("choices") or []
        if not choices:
            raise DecodeError("completion returned no choices")
        return choices[0]["text"]
