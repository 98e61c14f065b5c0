"""Pydantic model transformer — ``BaseModel`` instance ↔ plain ``dict``.

Model transformer for compound fields: the view edits a mapping of
primitives, the application object holds a validated Pydantic model.
Validation errors become a single field failure; the full error report
stays in the internal message.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from form_binder.lookups.base import import_model
from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer

logger = logging.getLogger(__name__)


@register_transformer("pydantic_model")
class PydanticModelTransformer(BaseTransformer):
    """Dump a model to a dict on render, validate the dict back on submit.

    Config keys:
        model   — dotted path to the Pydantic model (required).
        strict  — validate in strict mode (default False).
        mode    — ``model_dump`` mode, ``"python"`` or ``"json"`` (default ``"python"``).
    """

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        model_path: str = self._config["model"]
        self._model: type[BaseModel] = import_model(model_path)
        self._strict: bool = self._config.get("strict", False)
        self._mode: str = self._config.get("mode", "python")

    def transform(self, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        return value.model_dump(mode=self._mode)

    def reverse_transform(self, value: Any):
        if value is None or (isinstance(value, Mapping) and not value):
            return None
        if isinstance(value, self._model):
            return value
        try:
            return self._model.model_validate(value, strict=self._strict)
        except ValidationError as exc:
            errors = exc.errors()
            first = errors[0] if errors else {}
            field_path = ".".join(str(part) for part in first.get("loc", ()))
            logger.debug("%s: %d validation errors", self.name, len(errors))
            return self.fail(
                f"{self._model.__name__} validation failed — {exc}",
                _public_template(field_path),
                field=field_path,
                reason=first.get("msg", ""),
                count=len(errors),
            )


def _public_template(field_path: str) -> str:
    """Public template for a failed nested validation."""
    if field_path:
        return 'The value of "{{ field }}" is not valid: {{ reason }}.'
    return "This value is not valid: {{ reason }}."
