"""JSON file lookup — reads a local JSON file of records and resolves by key.

Useful for fixtures and for reference data exported to disk.  The file is
read once on ``connect()`` and indexed by ``key_field``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from form_binder.failures import LookupFailure
from form_binder.lookups.base import NOT_FOUND, BaseLookup
from form_binder.registry import register_lookup

logger = logging.getLogger(__name__)


@register_lookup("json_file")
class JSONFileLookup(BaseLookup):
    """Load records from a JSON file and resolve them by ``key_field``."""

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self._path = Path(config["file_path"])
        self._orient: str = config.get("orient", "records")
        self._key_field: str = config.get("key_field", "id")
        self._index: pd.DataFrame | None = None

    def connect(self) -> None:
        logger.info("Reading JSON from %s (orient=%s)", self._path, self._orient)
        try:
            df = pd.read_json(self._path, orient=self._orient, dtype=False)
        except (OSError, ValueError) as exc:
            raise LookupFailure(str(self._path), f"cannot read JSON: {exc}") from exc

        if self._key_field not in df.columns:
            raise LookupFailure(
                str(self._path), f"key_field {self._key_field!r} not in columns"
            )
        df = df.astype(object).where(df.notna(), None)
        df.index = df[self._key_field].astype(str)
        self._index = df
        logger.info("Indexed %d records by %r from %s", len(df), self._key_field, self._path)

    def resolve(self, key: str) -> Any:
        if self._index is None:
            self.connect()
        if key not in self._index.index:  # type: ignore[union-attr]
            return NOT_FOUND
        rows = self._index.loc[[key]]  # type: ignore[union-attr]
        if len(rows) > 1:
            logger.warning(
                "%s: %d records share key %r — using the first", self.name, len(rows), key
            )
        return self._build_entity(key, rows.iloc[0].to_dict())

    def close(self) -> None:
        self._index = None
