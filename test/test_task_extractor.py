from datetime import datetime, timezone

import pytest

from conftest import FakeNotion, block, page, rich, task_system
from extraction.task_extractor import OPEN_TASKS_FILTER, TaskExtractor
from prioritizer.errors import ConfigurationError, NoOpenTasksError, SchemaMismatchError


def test_discover_databases():
    dbs = TaskExtractor(task_system()).discover_databases("root")
    assert dbs.root == "root"
    assert (dbs.issues, dbs.threads, dbs.tasks) == ("db-issues", "db-threads", "db-tasks")


def test_discover_databases_without_toggle():
    notion = FakeNotion(children={"root": [block("paragraph", "no toggle here")]})
    with pytest.raises(ConfigurationError, match="toggle not found"):
        TaskExtractor(notion).discover_databases("root")


def test_discover_databases_missing_threads():
    notion = task_system()
    notion.children["tgl"] = [c for c in notion.children["tgl"] if c["id"] != "db-threads"]
    with pytest.raises(ConfigurationError, match="threads database not found"):
        TaskExtractor(notion).discover_databases("root")


def test_discover_databases_uses_first_toggle_only():
    notion = task_system()
    notion.children["root"].insert(0, {"id": "empty-tgl", "type": "toggle", "toggle": {}})
    with pytest.raises(ConfigurationError, match="issues database not found"):
        TaskExtractor(notion).discover_databases("root")


def test_fetch_open_tasks_sends_rollup_none_filter():
    notion = task_system(query_results=[page("t1", "A")])
    TaskExtractor(notion).fetch_open_tasks("db-tasks")

    db, sent = notion.queries[0]
    assert db == "db-tasks"
    assert sent == OPEN_TASKS_FILTER
    exited, thread = sent["and"]
    assert exited == {"property": "exited", "checkbox": {"equals": False}}
    assert thread["rollup"] == {"none": {"checkbox": {"equals": True}}}


def test_fetch_all_tasks_has_no_filter():
    notion = task_system(query_results=[page("t1", "A")])
    TaskExtractor(notion).fetch_all_tasks("db-tasks")
    assert notion.queries == [("db-tasks", None)]


def test_parse_task_maps_properties_and_notes():
    notion = task_system(
        extra_children={"t1": [block("heading_2", "Plan"), block("bulleted_list_item", "call")]}
    )
    task = TaskExtractor(notion).parse_task(page("t1", "Write report", parent="p0", subitems=["c1", "c2"]))

    assert task.id == "t1"
    assert task.name == "Write report"
    assert task.notes == "## Plan\n* call"
    assert task.parent == "p0"
    assert task.subitems == ("c1", "c2")
    assert task.exited is False
    assert task.created == datetime(2023, 1, 2, 10, 0, tzinfo=timezone.utc)
    assert task.updated == datetime(2023, 1, 3, 11, 30, tzinfo=timezone.utc)


def test_parse_task_empty_relations():
    task = TaskExtractor(task_system()).parse_task(page("t1", "Solo"))
    assert task.parent == ""
    assert task.subitems == ()
    assert task.notes == ""
    assert not task.is_parent


def test_parse_task_ignores_unknown_properties():
    p = page("t1", "A")
    p["properties"]["due"] = {"type": "date", "date": None}
    assert TaskExtractor(task_system()).parse_task(p).name == "A"


@pytest.mark.parametrize(
    "prop_name,bad,message",
    [
        ("name", {"type": "rich_text", "rich_text": rich("x")}, "name property is not a title"),
        ("parent", {"type": "checkbox", "checkbox": True}, "parent property is not a relation"),
        ("subitems", {"type": "title", "title": rich("x")}, "subitems property is not a relation"),
        ("exited", {"type": "relation", "relation": []}, "exited property is not a checkbox"),
    ],
)
def test_parse_task_schema_mismatch(prop_name, bad, message):
    p = page("t1", "A")
    p["properties"][prop_name] = bad
    with pytest.raises(SchemaMismatchError, match=message):
        TaskExtractor(task_system()).parse_task(p)


def test_extract_open_tasks_empty_is_fatal():
    with pytest.raises(NoOpenTasksError):
        TaskExtractor(task_system(query_results=[])).extract_open_tasks("db-tasks")


def test_extract_open_tasks_keeps_query_order():
    notion = task_system(query_results=[page("t2", "B"), page("t1", "A")])
    tasks = TaskExtractor(notion).extract_open_tasks("db-tasks")
    assert [t.id for t in tasks] == ["t2", "t1"]


@pytest.mark.parametrize("prop_name", ["parent", "subitems"])
def test_parse_task_relation_entry_without_id(prop_name):
    p = page("t1", "A")
    p["properties"][prop_name] = {"type": "relation", "relation": [{"object": "page"}]}
    with pytest.raises(SchemaMismatchError, match=f"{prop_name} relation entry has no id"):
        TaskExtractor(task_system()).parse_task(p)


@pytest.mark.parametrize("field", ["created_time", "last_edited_time"])
def test_parse_task_bad_timestamp(field):
    p = page("t1", "A")
    p[field] = "yesterday"
    with pytest.raises(SchemaMismatchError, match="t1"):
        TaskExtractor(task_system()).parse_task(p)


def test_parsed_task_subitems_cannot_be_mutated():
    task = TaskExtractor(task_system()).parse_task(page("t1", "A", subitems=["c1"]))
    with pytest.raises(AttributeError):
        task.subitems.append("c2")
