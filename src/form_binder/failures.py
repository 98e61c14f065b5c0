"""Failure types and public message resolution.

A :class:`TransformationFailure` is a *value* returned by
``reverse_transform`` — never raised.  The form driver collects one per
failing field and turns it into an end-user message; the internal message
is for logs only.

Exceptions in this module are the fatal kinds: a transformer breaking its
contract, or a lookup collaborator hitting an infrastructure error (which
transformers must convert into a failure before it leaves the chain).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_FALLBACK_MESSAGE = "This value is not valid."

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][\w.]*)\s*\}\}")


class FormBinderError(Exception):
    """Base class for errors raised by this package."""


class TransformerContractError(FormBinderError):
    """A transformer raised instead of returning a value or a failure.

    This is a programmer error: ``transform`` must never fail and
    ``reverse_transform`` must *return* failures.  It is never converted
    into a field-level message.
    """

    def __init__(self, transformer: str, direction: str, cause: BaseException) -> None:
        self.transformer = transformer
        self.direction = direction
        super().__init__(
            f"{transformer}.{direction}() raised {type(cause).__name__}: {cause}"
        )


class LookupFailure(FormBinderError):
    """A lookup collaborator could not answer (I/O, bad response, ...)."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"lookup of {key!r} failed: {reason}")


@dataclass(frozen=True)
class TransformationFailure:
    """Field-scoped, recoverable failure of an inbound conversion."""

    internal_message: str
    public_message: str | None = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    transformer: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def with_transformer(self, name: str) -> TransformationFailure:
        """Return a copy tagged with the failing step, keeping an existing tag."""
        if self.transformer is not None:
            return self
        return replace(self, transformer=name)

    def __str__(self) -> str:
        return self.internal_message


def render_message(template: str, parameters: Mapping[str, Any]) -> str:
    """Substitute ``{{ name }}`` placeholders; unknown names stay verbatim."""

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in parameters:
            return match.group(0)
        return str(parameters[name])

    return _PLACEHOLDER.sub(_sub, template)


def resolve_public_message(
    failure: TransformationFailure,
    invalid_message: str | None = None,
    invalid_message_parameters: Mapping[str, Any] | None = None,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> str:
    """Pick and render the message an end user sees for *failure*.

    Precedence: the failure's own public template, then the field's
    ``invalid_message``, then *fallback_message*.  The internal message is
    never part of the result.
    """
    field_params = dict(invalid_message_parameters or {})
    if failure.public_message is not None:
        return render_message(failure.public_message, {**field_params, **failure.parameters})
    if invalid_message is not None:
        return render_message(invalid_message, {**failure.parameters, **field_params})
    return render_message(fallback_message, dict(failure.parameters))
