"""Pydantic models for a task form — the usual demo application object.

``Task`` is the object a form binds to; ``Assignee`` is edited as a nested
mapping through the ``pydantic_model`` transformer.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from form_binder.schemas.issue import Issue


class Assignee(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr


class Task(BaseModel):
    title: str | None = None
    tags: list[str] | None = None
    issue: Issue | None = None
    estimate: int | None = None
    due: datetime | None = None
    done: bool | None = None
    assignee: Assignee | None = None
