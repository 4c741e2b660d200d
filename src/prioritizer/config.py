from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from prioritizer.errors import ConfigurationError

LLM_PROVIDERS = {"openai", "ollama", "mock"}


def _get(env: Mapping[str, str], key: str, default: str = "") -> str:
    return env.get(key, default).strip()


@dataclass(frozen=True)
class Settings:
    notion_token: str
    notion_root_page: str
    openai_api_key: str = ""

    llm_provider: str = "openai"
    openai_model: str = "gpt-3.5-turbo-instruct"
    openai_base_url: str = "https://api.openai.com/v1"
    ollama_model: str = "llama3.1"
    ollama_base_url: str = "http://localhost:11434"

    notion_base_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the process environment.

        NOTION_TOKEN and NOTION_ROOT_PAGE are always required. OPENAI_API_KEY
        is required only when the OpenAI provider is selected (the default).
        """
        env = os.environ if env is None else env

        notion_token = _get(env, "NOTION_TOKEN")
        if not notion_token:
            raise ConfigurationError("NOTION_TOKEN is not set")

        notion_root_page = _get(env, "NOTION_ROOT_PAGE")
        if not notion_root_page:
            raise ConfigurationError("NOTION_ROOT_PAGE is not set")

        llm_provider = _get(env, "LLM_PROVIDER", "openai").lower()
        if llm_provider not in LLM_PROVIDERS:
            raise ConfigurationError(f"unknown LLM_PROVIDER: {llm_provider!r}")

        openai_api_key = _get(env, "OPENAI_API_KEY")
        if llm_provider == "openai" and not openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        log_level = _get(env, "LOG_LEVEL", cls.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"unknown LOG_LEVEL: {log_level!r}")

        return cls(
            notion_token=notion_token,
            notion_root_page=notion_root_page,
            openai_api_key=openai_api_key,
            llm_provider=llm_provider,
            openai_model=_get(env, "OPENAI_MODEL", cls.openai_model),
            openai_base_url=_get(env, "OPENAI_BASE_URL", cls.openai_base_url),
            ollama_model=_get(env, "OLLAMA_MODEL", cls.ollama_model),
            ollama_base_url=_get(env, "OLLAMA_BASE_URL", cls.ollama_base_url),
            notion_base_url=_get(env, "NOTION_BASE_URL", cls.notion_base_url),
            notion_version=_get(env, "NOTION_VERSION", cls.notion_version),
            log_level=log_level,
        )
