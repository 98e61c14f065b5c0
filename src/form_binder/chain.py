"""Ordered transformer chains.

A field owns two chains: the *model* chain (model ↔ norm) and the *view*
chain (norm ↔ view).  Outbound, a chain applies its transformers in
declaration order; inbound, it applies ``reverse_transform`` in the exact
reverse order and stops at the first failure.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Literal

from form_binder.failures import TransformationFailure, TransformerContractError
from form_binder.transformers.base import BaseTransformer

logger = logging.getLogger(__name__)

ChainRole = Literal["model", "view"]


class TransformerChain:
    """An immutable, ordered sequence of transformers for one field role."""

    def __init__(
        self,
        transformers: Iterable[BaseTransformer] = (),
        role: ChainRole = "model",
    ) -> None:
        if role not in ("model", "view"):
            raise ValueError(f"Chain role must be 'model' or 'view', got {role!r}")
        self._transformers: tuple[BaseTransformer, ...] = tuple(transformers)
        self._role: ChainRole = role

    @property
    def role(self) -> ChainRole:
        return self._role

    @property
    def names(self) -> list[str]:
        return [t.name for t in self._transformers]

    def __len__(self) -> int:
        return len(self._transformers)

    def __iter__(self) -> Iterator[BaseTransformer]:
        return iter(self._transformers)

    def __repr__(self) -> str:
        return f"TransformerChain(role={self._role!r}, steps={self.names!r})"

    def append(self, transformer: BaseTransformer) -> TransformerChain:
        """Return a new chain with *transformer* added as the last step."""
        return TransformerChain((*self._transformers, transformer), self._role)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply_forward(self, value: Any) -> Any:
        """Run ``transform`` over every step in declaration order.

        A step that raises breaks the transformer contract; the error is
        re-raised as :class:`TransformerContractError`.
        """
        for transformer in self._transformers:
            try:
                value = transformer.transform(value)
            except Exception as exc:
                raise TransformerContractError(transformer.name, "transform", exc) from exc
            logger.debug("%s chain: %s.transform → %r", self._role, transformer.name, value)
        return value

    def apply_backward(self, value: Any) -> Any | TransformationFailure:
        """Run ``reverse_transform`` over every step in reverse order.

        Returns the converted value, or the first
        :class:`TransformationFailure` — later steps are not invoked.
        """
        for transformer in reversed(self._transformers):
            try:
                value = transformer.reverse_transform(value)
            except Exception as exc:
                raise TransformerContractError(
                    transformer.name, "reverse_transform", exc
                ) from exc
            if isinstance(value, TransformationFailure):
                logger.debug(
                    "%s chain: %s.reverse_transform failed — %s",
                    self._role, transformer.name, value.internal_message,
                )
                return value.with_transformer(transformer.name)
            logger.debug(
                "%s chain: %s.reverse_transform → %r", self._role, transformer.name, value
            )
        return value
