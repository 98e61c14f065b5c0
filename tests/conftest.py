"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from form_binder.lookups.in_memory import InMemoryLookup
from form_binder.schemas.issue import Issue


@pytest.fixture()
def issue_55() -> Issue:
    return Issue(id=55, title="Broken build")


@pytest.fixture()
def issue_lookup(issue_55: Issue) -> InMemoryLookup:
    """Lookup that knows exactly one issue: #55."""
    return InMemoryLookup(entities={55: issue_55})


@pytest.fixture()
def issues_json_file(tmp_path: Path) -> Path:
    """Write a small issue fixture to a temp file and return its path."""
    data = [
        {"id": 55, "title": "Broken build", "status": "open"},
        {"id": 56, "title": "Flaky test", "status": "closed"},
    ]
    path = tmp_path / "issues.json"
    path.write_text(json.dumps(data))
    return path
