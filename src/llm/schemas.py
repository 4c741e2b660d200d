from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class PrioritizeRequestTask(BaseModel):
    id: str  # anonymized handle, not the page id
    name: str
    notes: str = ""

class PrioritizeRequest(BaseModel):
    daily_focus: str = ""
    tasks: List[PrioritizeRequestTask] = Field(default_factory=list)

class PrioritizeReplyTask(BaseModel):
    # the reply is parsed as-is: no "45" -> 45 coercion
    model_config = ConfigDict(strict=True)

    id: str
    minutes: int = Field(..., ge=0)

class PrioritizeReply(BaseModel):
    model_config = ConfigDict(strict=True)

    tasks: List[PrioritizeReplyTask] = Field(default_factory=list)
