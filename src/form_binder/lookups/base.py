"""Base lookup interface.

A lookup is the read-only collaborator a transformer uses to turn a
submitted identifier back into an entity (database row, API resource, ...).
Transformers only ever talk to BaseLookup — they never know the concrete type.
"""

from __future__ import annotations

import abc
import importlib
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from form_binder.failures import LookupFailure


class _NotFound:
    """Sentinel type for a key with no matching entity."""

    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


def import_model(dotted_path: str) -> type[BaseModel]:
    """Dynamically import a Pydantic model class from a dotted path.

    Example: ``"form_binder.schemas.issue.Issue"``
    """
    module_path, _, class_name = dotted_path.rpartition(".")
    if not module_path:
        raise ImportError(f"Invalid model path: {dotted_path!r} (need module.Class)")
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
        raise TypeError(
            f"{dotted_path!r} resolved to {cls!r}, which is not a BaseModel subclass"
        )
    return cls


class BaseLookup(abc.ABC):
    """Resolve a key to an entity, or to :data:`NOT_FOUND`.

    Lifecycle (called by the engine in this order):
        1. __init__(config)  — receive the merged lookup config.
        2. connect()         — open connections / load the backing data.
        3. resolve(key)      — any number of times during a form pass.
        4. close()           — tear down resources (called even on failure).

    ``resolve`` raises :class:`~form_binder.failures.LookupFailure` for
    infrastructure errors; "no such entity" is :data:`NOT_FOUND`, not an error.

    Config keys shared by every lookup:
        model   — optional dotted path to a Pydantic model; found records are
                  validated into instances of it.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})
        model_path = self._config.get("model")
        self._model: type[BaseModel] | None = (
            import_model(model_path) if model_path else None
        )

    @property
    def name(self) -> str:
        """Human-readable name used in logs."""
        return self.__class__.__name__

    # -- lifecycle hooks -----------------------------------------------------

    def connect(self) -> None:
        """Open connections or load data.

        Default is a no-op so simple lookups can skip it.
        """

    @abc.abstractmethod
    def resolve(self, key: str) -> Any:
        """Return the entity stored under *key*, or :data:`NOT_FOUND`."""
        ...

    def close(self) -> None:
        """Release connections and clean up.

        Default is a no-op.
        """

    # -- helpers -------------------------------------------------------------

    def _build_entity(self, key: str, record: Mapping[str, Any]) -> Any:
        """Turn a raw record into the configured model, if any."""
        if self._model is None:
            return dict(record)
        try:
            return self._model.model_validate(dict(record))
        except ValidationError as exc:
            raise LookupFailure(
                key, f"record does not match {self._model.__name__}: {exc}"
            ) from exc

    # -- context-manager support ---------------------------------------------

    def __enter__(self) -> BaseLookup:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()
