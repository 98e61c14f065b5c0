"""Pass-through transformer — returns the value unchanged in both directions.

Useful as a placeholder when a field config wants an explicit step but no
conversion is needed.  Unlike the other transformers it keeps ``None`` as
``None``: the identity supports absence on both sides.
"""

from __future__ import annotations

import copy
from typing import Any

from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer


@register_transformer("pass_through")
class PassThroughTransformer(BaseTransformer):
    """Return a copy of the input with no modifications."""

    def transform(self, value: Any) -> Any:
        return copy.copy(value)

    def reverse_transform(self, value: Any) -> Any:
        return copy.copy(value)
