"""Decorator-based plugin registry for transformers and lookups.

Concrete classes register themselves at import time via decorators like
``@register_transformer("string_list")``.  The engine resolves string keys
from the form config to classes via ``get_transformer("string_list")`` — it
never imports a concrete class directly.
"""

from __future__ import annotations

_transformer_registry: dict[str, type] = {}
_lookup_registry: dict[str, type] = {}


# ---------------------------------------------------------------------------
# Decorator factories
# ---------------------------------------------------------------------------

def _registrar(registry: dict[str, type], kind: str, name: str):
    def decorator(cls: type) -> type:
        if name in registry:
            raise ValueError(
                f"Duplicate {kind} registration: {name!r} is already "
                f"registered to {registry[name].__name__}"
            )
        registry[name] = cls
        return cls

    return decorator


def register_transformer(name: str):
    """Class decorator that registers a transformer under *name*."""
    return _registrar(_transformer_registry, "transformer", name)


def register_lookup(name: str):
    """Class decorator that registers a lookup collaborator under *name*."""
    return _registrar(_lookup_registry, "lookup", name)


# ---------------------------------------------------------------------------
# Getters — used by the engine to resolve config keys → classes
# ---------------------------------------------------------------------------

def _resolve(registry: dict[str, type], kind: str, name: str) -> type:
    try:
        return registry[name]
    except KeyError:
        available = ", ".join(sorted(registry)) or "(none)"
        raise KeyError(f"Unknown {kind} {name!r}. Available: {available}") from None


def get_transformer(name: str) -> type:
    """Return the transformer class registered under *name*."""
    return _resolve(_transformer_registry, "transformer", name)


def get_lookup(name: str) -> type:
    """Return the lookup class registered under *name*."""
    return _resolve(_lookup_registry, "lookup", name)


def list_registered() -> dict[str, dict[str, str]]:
    """Return all registered modules grouped by category.

    Returns a dict like::

        {
            "transformers": {"string_list": "StringListTransformer", ...},
            "lookups":      {"json_file": "JSONFileLookup", ...},
        }
    """
    return {
        "transformers": {k: v.__name__ for k, v in sorted(_transformer_registry.items())},
        "lookups": {k: v.__name__ for k, v in sorted(_lookup_registry.items())},
    }
