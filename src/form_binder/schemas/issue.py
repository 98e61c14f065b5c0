"""Pydantic model for issue-tracker records.

Referenced by dotted path in lookup configs:
    model: "form_binder.schemas.issue.Issue"
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Issue(BaseModel):
    id: int = Field(..., ge=1)
    title: str = ""
    status: str = "open"
