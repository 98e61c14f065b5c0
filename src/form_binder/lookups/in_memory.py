"""In-memory lookup — resolves keys against a dict.

Handy for tests and for small fixed reference sets declared inline in the
form YAML.
"""

from __future__ import annotations

from typing import Any, Mapping

from form_binder.lookups.base import NOT_FOUND, BaseLookup
from form_binder.registry import register_lookup


@register_lookup("in_memory")
class InMemoryLookup(BaseLookup):
    """Resolve keys from ``config["entities"]`` or an explicit mapping."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        entities: Mapping[Any, Any] | None = None,
    ) -> None:
        super().__init__(config)
        source = entities if entities is not None else self._config.get("entities", {})
        # Keys are compared as strings: submitted identifiers always are.
        self._entities: dict[str, Any] = {str(k): v for k, v in source.items()}

    def resolve(self, key: str) -> Any:
        if key not in self._entities:
            return NOT_FOUND
        entity = self._entities[key]
        if self._model is not None and isinstance(entity, Mapping):
            return self._build_entity(key, entity)
        return entity
