"""SQLAlchemy database lookup — resolves a key with a read-only SELECT."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, MetaData, Table, create_engine, select
from sqlalchemy.exc import SQLAlchemyError

from form_binder.failures import LookupFailure
from form_binder.lookups.base import NOT_FOUND, BaseLookup
from form_binder.registry import register_lookup

logger = logging.getLogger(__name__)


@register_lookup("sql_database")
class SQLAlchemyLookup(BaseLookup):
    """Fetch one row by ``key_column`` from ``table_name`` in any SQL database.

    The table is reflected on ``connect()``; the lookup never writes.
    """

    def __init__(self, config: dict[str, Any], engine: Engine | None = None) -> None:
        super().__init__(config)
        self._engine: Engine | None = engine
        self._owns_engine = engine is None
        self._table: Table | None = None

    def connect(self) -> None:
        if self._engine is None:
            connection_string = self._config["connection_string"]
            self._engine = create_engine(connection_string)
            logger.info("Connected to database: %s", connection_string)

        table_name = self._config["table_name"]
        try:
            self._table = Table(table_name, MetaData(), autoload_with=self._engine)
        except SQLAlchemyError as exc:
            raise LookupFailure(table_name, f"cannot reflect table: {exc}") from exc

        key_column = self._config.get("key_column", "id")
        if key_column not in self._table.c:
            raise LookupFailure(
                table_name, f"key_column {key_column!r} not in table {table_name!r}"
            )

    def resolve(self, key: str) -> Any:
        if self._table is None:
            self.connect()

        column = self._table.c[self._config.get("key_column", "id")]  # type: ignore[union-attr]
        try:
            typed_key = column.type.python_type(key)
        except (NotImplementedError, TypeError, ValueError):
            typed_key = key

        stmt = select(self._table).where(column == typed_key).limit(1)
        try:
            with self._engine.connect() as conn:  # type: ignore[union-attr]
                row = conn.execute(stmt).mappings().first()
        except (SQLAlchemyError, OverflowError, ValueError) as exc:
            # drivers raise plain OverflowError for keys outside the column range
            raise LookupFailure(key, f"query failed: {exc}") from exc

        if row is None:
            logger.debug("%s: no row for key %r", self.name, key)
            return NOT_FOUND
        return self._build_entity(key, row)

    def close(self) -> None:
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None
            logger.info("Disposed database engine")
        self._table = None
