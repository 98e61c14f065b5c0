"""Entity-to-identifier transformer — ``Issue(id=55)`` ↔ ``"55"``.

Model transformer for reference fields: the form edits the identifier, the
application object holds the entity.  Submitting an identifier resolves it
through the injected lookup; an unknown identifier or a failing lookup
becomes a field-level failure, never an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from form_binder.failures import LookupFailure
from form_binder.lookups.base import NOT_FOUND, BaseLookup
from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer

logger = logging.getLogger(__name__)

DEFAULT_NOT_FOUND_MESSAGE = 'An entity with identifier "{{ value }}" does not exist.'


@register_transformer("entity_to_identifier")
class EntityToIdentifierTransformer(BaseTransformer):
    """Render an entity as its identifier; resolve the identifier back on submit.

    Config keys:
        id_field          — attribute or key holding the identifier (default ``"id"``).
        lookup            — name of the lookup to inject (resolved by the engine).
        not_found_message — public template; ``{{ value }}`` is the submitted key.

    The lookup itself is a constructor argument, never looked up globally.
    """

    requires_lookup = True

    def __init__(self, config: dict[str, Any] | None = None, *, lookup: BaseLookup) -> None:
        super().__init__(config)
        self._lookup = lookup
        self._id_field: str = self._config.get("id_field", "id")
        self._not_found_message: str = self._config.get(
            "not_found_message", DEFAULT_NOT_FOUND_MESSAGE
        )

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, Mapping):
            identifier = value[self._id_field]
        else:
            identifier = getattr(value, self._id_field)
        return "" if identifier is None else str(identifier)

    def reverse_transform(self, value: Any):
        if self.is_empty(value):
            return None

        key = str(value).strip()
        try:
            entity = self._lookup.resolve(key)
        except LookupFailure as exc:
            logger.debug("%s: lookup %s failed for %r", self.name, self._lookup.name, key)
            return self.fail(
                f"{self._lookup.name} could not resolve {key!r}: {exc.reason}",
                value=key,
            )

        if entity is NOT_FOUND:
            return self.fail(
                f"{self._lookup.name} has no entity for {self._id_field}={key!r}",
                self._not_found_message,
                value=key,
            )
        return entity
