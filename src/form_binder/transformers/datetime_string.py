"""Datetime view transformer — ``datetime`` ↔ formatted string."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer

DEFAULT_FORMAT = "%Y-%m-%d %H:%M:%S"


@register_transformer("datetime_to_string")
class DateTimeToStringTransformer(BaseTransformer):
    """Format a datetime for a text input and parse it back with the same format.

    Round-trips exactly when ``format`` covers every component the model
    value carries; a format without seconds drops the seconds.

    Config keys:
        format   — ``strftime``/``strptime`` pattern (default ``"%Y-%m-%d %H:%M:%S"``).
        as_date  — return a ``date`` instead of a ``datetime`` on submit.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._format: str = self._config.get("format", DEFAULT_FORMAT)
        self._as_date: bool = self._config.get("as_date", False)

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        return value.strftime(self._format)

    def reverse_transform(self, value: Any):
        if self.is_empty(value):
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                parsed = datetime.strptime(value.strip(), self._format)
            except ValueError as exc:
                return self.fail(
                    f"{value!r} does not match {self._format!r}: {exc}",
                    "Please enter a valid date and time.",
                    value=value,
                    format=self._format,
                )
        else:
            return self.fail(f"Expected a string, got {type(value).__name__}")

        return parsed.date() if self._as_date else parsed
