"""Scalar view transformers — numbers, booleans and plain text ↔ strings.

These sit on the view side of a field: the norm value is a Python scalar,
the view value is what a text input or checkbox submits.

Empty values, per transformer:

==================  ===============  ================================
transformer         transform(None)  reverse_transform("" / None)
==================  ===============  ================================
integer_to_string   ``""``           ``None``
number_to_string    ``""``           ``None``
boolean_to_string   ``None``         ``False`` (unchecked checkbox)
trim_string         ``""``           ``None``
==================  ===============  ================================
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from form_binder.registry import register_transformer
from form_binder.transformers.base import BaseTransformer

logger = logging.getLogger(__name__)


@register_transformer("integer_to_string")
class IntegerToStringTransformer(BaseTransformer):
    """``42`` ↔ ``"42"``.  Rejects fractions and non-numeric text.

    Config keys:
        grouping — allow ``_`` / ``,`` digit separators on submit (default False).
    """

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        return str(int(value))

    def reverse_transform(self, value: Any):
        if self.is_empty(value):
            return None
        if isinstance(value, bool):
            return self.fail(
                "Expected a string or integer, got bool",
                "Please enter an integer.",
            )
        if isinstance(value, int):
            return value

        text = str(value).strip()
        if self._config.get("grouping", False):
            text = text.replace(",", "").replace("_", "")
        try:
            return int(text)
        except ValueError:
            return self.fail(
                f"{text!r} is not a base-10 integer",
                "Please enter an integer.",
                value=text,
            )


@register_transformer("number_to_string")
class NumberToStringTransformer(BaseTransformer):
    """``Decimal("3.14")`` ↔ ``"3.14"``.

    Lossy by design when ``scale`` is set: values are rounded half-up to
    ``scale`` decimal places in both directions.

    Config keys:
        scale       — decimal places to round to (default: no rounding).
        as_float    — return ``float`` instead of ``Decimal`` on submit.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._scale: int | None = self._config.get("scale")
        self._as_float: bool = self._config.get("as_float", False)

    def _round(self, number: Decimal) -> Decimal:
        if self._scale is None:
            return number
        return number.quantize(Decimal(1).scaleb(-self._scale), rounding=ROUND_HALF_UP)

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        number = Decimal(str(value))
        try:
            return str(self._round(number))
        except InvalidOperation:
            # not representable at this scale; render it unrounded
            logger.warning("%s: cannot round %r to scale %s", self.name, value, self._scale)
            return str(number)

    def reverse_transform(self, value: Any):
        if self.is_empty(value):
            return None
        text = str(value).strip()
        try:
            number = Decimal(text)
        except InvalidOperation:
            return self.fail(
                f"{text!r} is not a decimal number",
                "Please enter a number.",
                value=text,
            )
        if not number.is_finite():
            return self.fail(f"{text!r} is not finite", "Please enter a number.", value=text)

        try:
            number = self._round(number)
        except InvalidOperation:
            return self.fail(
                f"{text!r} cannot be rounded to {self._scale} places",
                "Please enter a number.",
                value=text,
            )
        return float(number) if self._as_float else number


@register_transformer("boolean_to_string")
class BooleanToStringTransformer(BaseTransformer):
    """``True`` ↔ ``"1"``, ``False``/``None`` ↔ absent — checkbox semantics.

    An unchecked checkbox submits nothing, so ``None`` is this
    representation's empty value and means ``False`` on the way back.

    Config keys:
        true_value   — view value for ``True`` (default ``"1"``).
        false_values — submitted values that also mean ``False`` (default ``[""]``).
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._true_value: str = str(self._config.get("true_value", "1"))
        self._false_values: list[Any] = list(self._config.get("false_values", [""]))

    def transform(self, value: Any) -> str | None:
        if not value:
            return None
        return self._true_value

    def reverse_transform(self, value: Any):
        if value is None or value in self._false_values:
            return False
        if not isinstance(value, str):
            return self.fail(
                f"Expected a string, got {type(value).__name__}",
            )
        return True


@register_transformer("trim_string")
class TrimStringTransformer(BaseTransformer):
    """Strip surrounding whitespace from submitted text.

    Lossy: leading and trailing whitespace never reaches the model.
    Whitespace-only input counts as empty.
    """

    def transform(self, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def reverse_transform(self, value: Any):
        if value is None:
            return None
        if not isinstance(value, str):
            return self.fail(f"Expected a string, got {type(value).__name__}")
        stripped = value.strip()
        if stripped != value:
            logger.debug("%s: stripped %d characters", self.name, len(value) - len(stripped))
        return stripped or None
