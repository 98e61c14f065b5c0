"""String list transformer — ``["a", "b", "c"]`` ↔ ``"a, b, c"``.

Model transformer for tag-like fields edited as a single text input.
Normalisation is lossy in one documented way: items are stripped and empty
items are dropped on the way back, so ``"a,, b "`` becomes ``["a", "b"]``.
Non-empty items are never dropped.  An empty list renders as ``""`` and
comes back as ``None``, the same as an absent list.
"""

from __future__ import annotations

from typing import Any

from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer


@register_transformer("string_list")
class StringListTransformer(BaseTransformer):
    """Join a list of strings for display, split it again on submit.

    Config keys:
        delimiter   — separator used to split on submit (default ``","``).
        glue        — separator used to join on render (default ``delimiter + " "``).
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._delimiter: str = self._config.get("delimiter", ",")
        if not self._delimiter:
            raise ValueError("string_list delimiter must not be empty")
        self._glue: str = self._config.get("glue", f"{self._delimiter} ")

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        return self._glue.join(str(item) for item in value)

    def reverse_transform(self, value: Any):
        if self.is_empty(value):
            return None
        if not isinstance(value, str):
            return self.fail(
                f"Expected a string, got {type(value).__name__}",
                "This value should be a list of items separated by "
                "\"{{ delimiter }}\".",
                delimiter=self._delimiter,
            )
        items = [part.strip() for part in value.split(self._delimiter)]
        return [item for item in items if item] or None
