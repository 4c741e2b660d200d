from functools import lru_cache
from typing import Iterator

from fastapi import HTTPException

from api.backend import BackendAPI
from llm.llm_client import LLMClient, build_provider
from note_store.client import NotionClient
from prioritizer.config import Settings
from prioritizer.errors import ConfigurationError


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def get_backend() -> Iterator[BackendAPI]:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    with NotionClient(
        settings.notion_token,
        base_url=settings.notion_base_url,
        notion_version=settings.notion_version,
    ) as notion:
        yield BackendAPI(
            notion=notion,
            llm_client=LLMClient(provider=build_provider(settings)),
            root_page_id=settings.notion_root_page,
        )
