"""Base transformer interface.

A transformer converts one value between two adjacent representations of a
field (model ↔ norm, or norm ↔ view).  Transformers are pure: no side
effects, no mutable state shared with the pipeline.  A transformer may read
through an injected lookup collaborator, but it never writes.
"""

from __future__ import annotations

import abc
from typing import Any

from form_binder.failures import TransformationFailure


class BaseTransformer(abc.ABC):
    """Convert a value outbound with ``transform`` and back with ``reverse_transform``.

    Transformers are chained by a :class:`~form_binder.chain.TransformerChain`
    in the order declared in the field config.  Outbound (render), each
    transformer receives the output of the previous one; inbound (submit)
    the chain runs them in reverse.

    Contract:
        1. __init__(config)           — receive the merged step config.
        2. transform(value)           — never fails, ``None`` included; returns
                                        the representation's empty value for ``None``.
        3. reverse_transform(value)   — returns the converted value, or a
                                        :class:`TransformationFailure`.  Empty
                                        input maps to ``None``.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.name}({self._config!r})"

    # -- hooks ---------------------------------------------------------------

    @abc.abstractmethod
    def transform(self, value: Any) -> Any:
        """Return *value* converted one step towards the view.

        Implementations must **never** mutate *value* in place.
        """
        ...

    @abc.abstractmethod
    def reverse_transform(self, value: Any) -> Any | TransformationFailure:
        """Return *value* converted one step towards the model.

        Return (do not raise) a :class:`TransformationFailure` when *value*
        is well-typed but does not map to a valid model value.
        """
        ...

    # -- helpers -------------------------------------------------------------

    def fail(
        self,
        internal_message: str,
        public_message: str | None = None,
        **parameters: Any,
    ) -> TransformationFailure:
        """Build a failure tagged with this transformer's name."""
        return TransformationFailure(
            internal_message=internal_message,
            public_message=public_message,
            parameters=parameters,
            transformer=self.name,
        )

    @staticmethod
    def is_empty(value: Any) -> bool:
        """``True`` for the absent/empty submissions every transformer accepts."""
        return value is None or value == ""
