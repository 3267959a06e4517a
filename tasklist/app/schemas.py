from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TodoForm(BaseModel):
    """Raw creation payload, as submitted by the form or the JSON API."""

    description: str = ""


@dataclass(frozen=True)
class ValidatedTodo:
    description: str


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool


class FlashMessage(BaseModel):
    name: str
    msg: str


class IndexContext(BaseModel):
    msg: Optional[FlashMessage] = None
    tasks: List[TaskOut]


class TaskListResponse(BaseModel):
    items: List[TaskOut]
    total: int


class ActionResponse(BaseModel):
    ok: bool
    message: Optional[str] = None
