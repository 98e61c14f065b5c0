"""Field bindings and the form driver.

:class:`Form` runs the two passes over every bound field:

* render  — ``model → model_chain.forward → norm → view_chain.forward → view``
* submit  — ``view → view_chain.backward → norm → model_chain.backward → model``

Each field moves ``PENDING → TRANSFORMED → BOUND | FAILED``.  A failing
field never stops its siblings, and its model attribute is left as it was.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, MutableMapping

from form_binder.chain import TransformerChain
from form_binder.failures import (
    DEFAULT_FALLBACK_MESSAGE,
    TransformationFailure,
    resolve_public_message,
)

logger = logging.getLogger(__name__)


class FieldState(enum.Enum):
    PENDING = "pending"
    TRANSFORMED = "transformed"
    BOUND = "bound"
    FAILED = "failed"


@dataclass(frozen=True)
class FieldBinding:
    """A field's name, its two chains and its invalid-message configuration."""

    name: str
    model_chain: TransformerChain = field(default_factory=lambda: TransformerChain(role="model"))
    view_chain: TransformerChain = field(default_factory=lambda: TransformerChain(role="view"))
    invalid_message: str | None = None
    invalid_message_parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name must not be empty")
        if self.model_chain.role != "model":
            raise ValueError(f"Field {self.name!r}: model_chain has role {self.model_chain.role!r}")
        if self.view_chain.role != "view":
            raise ValueError(f"Field {self.name!r}: view_chain has role {self.view_chain.role!r}")

    def to_view(self, model_value: Any) -> Any:
        norm = self.model_chain.apply_forward(model_value)
        return self.view_chain.apply_forward(norm)

    def to_model(self, view_value: Any) -> Any | TransformationFailure:
        norm = self.view_chain.apply_backward(view_value)
        if isinstance(norm, TransformationFailure):
            return norm
        return self.model_chain.apply_backward(norm)


@dataclass
class FieldOutcome:
    """Result of one pass over one field."""

    field: str
    state: FieldState = FieldState.PENDING
    value: Any = None
    message: str | None = None
    failure: TransformationFailure | None = None


@dataclass
class RenderResult:
    """Outcomes of an outbound pass, keyed by field name."""

    outcomes: dict[str, FieldOutcome]

    @property
    def values(self) -> dict[str, Any]:
        return {name: o.value for name, o in self.outcomes.items()}


@dataclass
class SubmissionResult:
    """Outcomes of an inbound pass, keyed by field name in declaration order."""

    outcomes: dict[str, FieldOutcome]

    @property
    def bound(self) -> dict[str, Any]:
        return {
            name: o.value for name, o in self.outcomes.items() if o.state is FieldState.BOUND
        }

    @property
    def errors(self) -> dict[str, str]:
        return {
            name: o.message  # type: ignore[misc]
            for name, o in self.outcomes.items()
            if o.state is FieldState.FAILED
        }

    @property
    def failures(self) -> dict[str, TransformationFailure]:
        return {
            name: o.failure  # type: ignore[misc]
            for name, o in self.outcomes.items()
            if o.state is FieldState.FAILED
        }

    @property
    def is_valid(self) -> bool:
        return not any(o.state is FieldState.FAILED for o in self.outcomes.values())


class Form:
    """Bind a set of fields to an application object and run both passes.

    The data object may be any object with attributes named after the
    fields, or a mutable mapping keyed by field name.
    """

    def __init__(
        self,
        bindings: Iterable[FieldBinding],
        data: Any = None,
        *,
        name: str = "form",
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> None:
        self._bindings: dict[str, FieldBinding] = {}
        for binding in bindings:
            if binding.name in self._bindings:
                raise ValueError(f"Duplicate field {binding.name!r} in form {name!r}")
            self._bindings[binding.name] = binding
        self._data = data
        self._name = name
        self._fallback_message = fallback_message

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> list[str]:
        return list(self._bindings)

    def get_binding(self, name: str) -> FieldBinding:
        return self._bindings[name]

    def get_data(self) -> Any:
        return self._data

    def set_data(self, data: Any) -> None:
        self._data = data

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def create_view(self) -> RenderResult:
        """Outbound pass: compute the view value of every field."""
        outcomes: dict[str, FieldOutcome] = {}
        for name, binding in self._bindings.items():
            outcomes[name] = FieldOutcome(
                field=name,
                state=FieldState.BOUND,
                value=binding.to_view(self._read(name)),
            )
        logger.info("Form %r rendered %d fields", self._name, len(outcomes))
        return RenderResult(outcomes)

    def submit(
        self,
        view_values: Mapping[str, Any],
        *,
        clear_missing: bool = True,
    ) -> SubmissionResult:
        """Inbound pass: convert submitted view values and write them back.

        Fields absent from *view_values* are submitted as ``None`` when
        *clear_missing* is true; otherwise they stay ``PENDING`` and their
        model value is untouched.  Every field is processed, whatever
        happens to the others.
        """
        if self._data is None:
            self._data = {}

        unknown = set(view_values) - set(self._bindings)
        if unknown:
            logger.warning(
                "Form %r ignoring extra submitted fields: %s",
                self._name, ", ".join(sorted(unknown)),
            )

        outcomes: dict[str, FieldOutcome] = {}
        for name, binding in self._bindings.items():
            outcome = FieldOutcome(field=name)
            outcomes[name] = outcome
            if name not in view_values and not clear_missing:
                continue

            result = binding.to_model(view_values.get(name))
            outcome.state = FieldState.TRANSFORMED

            if isinstance(result, TransformationFailure):
                outcome.state = FieldState.FAILED
                outcome.failure = result
                outcome.message = resolve_public_message(
                    result,
                    binding.invalid_message,
                    binding.invalid_message_parameters,
                    self._fallback_message,
                )
                logger.warning(
                    "Form %r field %r failed in %s: %s",
                    self._name, name, result.transformer or "(unknown)", result.internal_message,
                )
                continue

            self._write(name, result)
            outcome.value = result
            outcome.state = FieldState.BOUND

        submission = SubmissionResult(outcomes)
        logger.info(
            "Form %r submitted: %d bound, %d failed",
            self._name, len(submission.bound), len(submission.errors),
        )
        return submission

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read(self, name: str) -> Any:
        if self._data is None:
            return None
        if isinstance(self._data, Mapping):
            return self._data.get(name)
        return getattr(self._data, name, None)

    def _write(self, name: str, value: Any) -> None:
        if isinstance(self._data, MutableMapping):
            self._data[name] = value
        else:
            setattr(self._data, name, value)
