import pytest


def rich(text: str) -> list:
    return [{"type": "text", "plain_text": text}]


def block(block_type: str, text: str = "", block_id: str = "") -> dict:
    return {
        "object": "block",
        "id": block_id or f"blk-{block_type}-{text}",
        "type": block_type,
        block_type: {"rich_text": rich(text)},
    }


def page(
    page_id: str,
    name: str,
    parent: str = "",
    subitems=(),
    exited: bool = False,
) -> dict:
    return {
        "object": "page",
        "id": page_id,
        "created_time": "2023-01-02T10:00:00.000Z",
        "last_edited_time": "2023-01-03T11:30:00.000Z",
        "properties": {
            "name": {"id": "title", "type": "title", "title": rich(name)},
            "parent": {
                "id": "p1",
                "type": "relation",
                "relation": [{"id": parent}] if parent else [],
            },
            "subitems": {
                "id": "p2",
                "type": "relation",
                "relation": [{"id": s} for s in subitems],
            },
            "exited": {"id": "p3", "type": "checkbox", "checkbox": exited},
        },
    }


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._response_text


class FakeNotion:
    """In-memory stand-in for NotionClient.

    `children` maps block/page ids to child blocks, `databases` maps database
    ids to their metadata and `query_results` is returned by every query.
    """

    def __init__(self, children=None, databases=None, query_results=None):
        self.children = children or {}
        self.databases = databases or {}
        self.query_results = query_results or []
        self.queries = []

    def get_block_children(self, block_id: str) -> list:
        return self.children.get(block_id, [])

    def get_database(self, database_id: str) -> dict:
        return self.databases[database_id]

    def query_database(self, database_id: str, filter=None) -> list:
        self.queries.append((database_id, filter))
        return list(self.query_results)

    def close(self) -> None:
        pass


def task_system(query_results=None, extra_children=None) -> FakeNotion:
    """A root page holding a toggle with the three task databases."""
    children = {
        "root": [block("paragraph", "intro"), {"id": "tgl", "type": "toggle", "toggle": {}}],
        "tgl": [
            {"id": "db-issues", "type": "child_database", "child_database": {"title": "issues"}},
            {"id": "db-threads", "type": "child_database", "child_database": {"title": "threads"}},
            {"id": "db-tasks", "type": "child_database", "child_database": {"title": "tasks"}},
        ],
    }
    children.update(extra_children or {})
    databases = {
        "db-issues": {"id": "db-issues", "title": rich("issues")},
        "db-threads": {"id": "db-threads", "title": rich("threads")},
        "db-tasks": {"id": "db-tasks", "title": rich("tasks")},
    }
    return FakeNotion(children=children, databases=databases, query_results=query_results)


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def notion_factory():
    return task_system
