from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    notes: str = ""  # commonmark of the page body
    parent: str = ""
    subitems: Tuple[str, ...] = ()
    exited: bool = False

    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("id must not be blank")
        return v

    @property
    def is_parent(self) -> bool:
        return len(self.subitems) > 0


class PrioritizedTask(Task):
    # estimated time to complete, derived from the model's minute count
    duration: timedelta = Field(default_factory=timedelta)


@dataclass(frozen=True)
class TaskSystemDatabases:
    root: str
    issues: str
    threads: str
    tasks: str
