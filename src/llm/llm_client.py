from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from llm.prompts import OUTPUT_STUB, PRIORITIZE_TEMPLATE
from llm.providers.base import CompletionProvider
from llm.schemas import PrioritizeReply, PrioritizeRequest
from prioritizer.config import Settings
from prioritizer.errors import ConfigurationError, DecodeError

logger = logging.getLogger(__name__)


def encode_prioritize_prompt(request: PrioritizeRequest) -> str:
    body = request.model_dump_json()
    return PRIORITIZE_TEMPLATE % (body, OUTPUT_STUB)


def decode_prioritize_reply(raw: str) -> PrioritizeReply:
    """Parse a completion that continues OUTPUT_STUB.

    Strict: anything that is not valid JSON of the reply shape is an error.
    """
    try:
        return PrioritizeReply.model_validate_json(OUTPUT_STUB + raw)
    except ValidationError as e:
        raise DecodeError(f"failed to unmarshal output: {e}") from e


def build_provider(settings: Settings) -> CompletionProvider:
    if settings.llm_provider == "openai":
        from llm.providers.openai_provider import OpenAIProvider

        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )
    if settings.llm_provider == "ollama":
        from llm.providers.ollama_provider import OllamaProvider

        return OllamaProvider(model=settings.ollama_model, base_url=settings.ollama_base_url)
    if settings.llm_provider == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()
    raise ConfigurationError(f"unknown LLM provider: {settings.llm_provider!r}")


class LLMClient:
    """Prompt codec plus a completion provider."""

    def __init__(self, provider: CompletionProvider):
        self.provider = provider

    def complete(self, prompt: str) -> str:
        start = time.time()
        raw = self.provider.complete(prompt)
        logger.info(
            f"Completion returned {len(raw)} chars in {time.time() - start:.2f}s "
            f"(prompt {len(prompt)} chars)"
        )
        return raw

    def prioritize(self, request: PrioritizeRequest) -> PrioritizeReply:
        prompt = encode_prioritize_prompt(request)
        return decode_prioritize_reply(self.complete(prompt))
