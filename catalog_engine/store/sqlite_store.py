"""
SQLite implementation of CatalogService.

This module owns the on-disk persistence format for Authors and Books.

Threading
---------
Every call opens, commits and closes its own sqlite3 connection on the calling
thread. The async methods do not yield before the write commits, so an awaited
call returning means the write is durable.

The sqlite3 calls are synchronous, so each one blocks the event loop until it
returns. Handlers therefore never run concurrently with a write against this
backend; the controllers' in-flight guard only matters for services that
yield while a request is outstanding.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Iterator, Mapping, Sequence

from ..data_models import AUTHORS_PATH, BOOKS_PATH, EntityKey, Filter, FilterOperator
from ..paths import catalog_db_path
from .api import BindingListener, CatalogService, EntityContext, ListBinding
from .errors import (
    StaleContextError,
    StoreRejectedError,
    UnknownEntityError,
    UnknownEntitySetError,
)
from .schema import SCHEMA_V1

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _EntitySet:
    table: str
    columns: tuple[str, ...]
    mutable: frozenset[str]
    booleans: frozenset[str] = frozenset()
    order_by: str = "id"


_ENTITY_SETS: Final[Mapping[str, _EntitySet]] = {
    AUTHORS_PATH: _EntitySet(
        table="authors",
        columns=("name", "bio", "is_deleted"),
        mutable=frozenset({"name", "bio", "is_deleted"}),
        booleans=frozenset({"is_deleted"}),
        order_by="name",
    ),
    BOOKS_PATH: _EntitySet(
        table="books",
        columns=("author_id", "title", "descr", "stock", "price", "currency_code"),
        mutable=frozenset({"title", "descr", "stock", "price", "currency_code"}),
        order_by="title",
    ),
}


def _entity_set(entity_path: str) -> _EntitySet:
    try:
        return _ENTITY_SETS[entity_path]
    except KeyError:
        raise UnknownEntitySetError(f"Unknown entity set: {entity_path}") from None


def _flatten(payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten one level of nested mappings into underscore-joined columns.

    ``{"currency": {"code": "EUR"}}`` becomes ``{"currency_code": "EUR"}``.
    """
    flat: dict[str, Any] = {}
    for name, value in payload.items():
        if isinstance(value, Mapping):
            for sub, sub_value in value.items():
                flat[f"{name}_{sub}"] = sub_value
        else:
            flat[name] = value
    return flat


def _to_db(es: _EntitySet, name: str, value: Any) -> Any:
    if name in es.booleans:
        return 1 if value else 0
    return value


def _row_to_mapping(es: _EntitySet, row: sqlite3.Row) -> dict[str, Any]:
    out: dict[str, Any] = {"id": str(row["id"])}
    for col in es.columns:
        value = row[col]
        out[col] = bool(value) if col in es.booleans else value
    return out


@dataclass(frozen=True, slots=True)
class SqliteCatalogService(CatalogService):
    """
    SQLite-backed CatalogService.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.

    Notes
    -----
    The database file is created if absent. The parent directory is created as
    needed.
    """

    db_path: Path

    def __post_init__(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA_V1)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    async def create(self, entity_path: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        """See CatalogService.create."""
        es = _entity_set(entity_path)
        values = _flatten(payload)
        unknown = sorted(set(values) - set(es.columns))
        if unknown:
            raise StoreRejectedError(f"Unknown field(s) for {entity_path}: {', '.join(unknown)}")

        key: EntityKey = uuid.uuid4().hex
        names = ["id", *values]
        params = [key, *(_to_db(es, n, v) for n, v in values.items())]
        placeholders = ", ".join("?" for _ in names)
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO {es.table}({', '.join(names)}) VALUES({placeholders})",
                    params,
                )
                row = conn.execute(f"SELECT * FROM {es.table} WHERE id = ?", (key,)).fetchone()
        except sqlite3.IntegrityError as exc:
            raise StoreRejectedError(f"Create on {entity_path} rejected: {exc}") from exc

        logger.info("Created %s(%s)", entity_path, key)
        return _row_to_mapping(es, row)

    async def fetch(self, entity_path: str, key: EntityKey) -> Mapping[str, Any]:
        """See CatalogService.fetch."""
        es = _entity_set(entity_path)
        with self._connect() as conn:
            row = conn.execute(f"SELECT * FROM {es.table} WHERE id = ?", (key,)).fetchone()
        if row is None:
            raise UnknownEntityError(f"Unknown key in {entity_path}: {key}")
        return _row_to_mapping(es, row)

    def bind_list(self, entity_path: str, filters: Sequence[Filter] = ()) -> ListBinding:
        """See CatalogService.bind_list."""
        es = _entity_set(entity_path)
        for flt in filters:
            if flt.path != "id" and flt.path not in es.columns:
                raise UnknownEntitySetError(f"Unknown filter field for {entity_path}: {flt.path}")
        return SqliteListBinding(service=self, entity_path=entity_path, filters=tuple(filters))

    def _query(self, entity_path: str, filters: Sequence[Filter]) -> list[dict[str, Any]]:
        es = _entity_set(entity_path)
        clauses: list[str] = []
        params: list[Any] = []
        for flt in filters:
            op = "IS" if flt.operator is FilterOperator.EQ else "IS NOT"
            clauses.append(f"{flt.path} {op} ?")
            params.append(_to_db(es, flt.path, flt.value))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM {es.table}{where} ORDER BY {es.order_by} ASC, id ASC",
                params,
            ).fetchall()
        return [_row_to_mapping(es, r) for r in rows]

    def _update(self, entity_path: str, key: EntityKey, name: str, value: Any) -> None:
        es = _entity_set(entity_path)
        if name not in es.mutable:
            raise StoreRejectedError(f"Field is not mutable on {entity_path}: {name}")
        try:
            with self._connect() as conn:
                cur = conn.execute(
                    f"UPDATE {es.table} SET {name} = ? WHERE id = ?",
                    (_to_db(es, name, value), key),
                )
        except sqlite3.IntegrityError as exc:
            raise StoreRejectedError(f"Update on {entity_path} rejected: {exc}") from exc
        if cur.rowcount == 0:
            raise UnknownEntityError(f"Unknown key in {entity_path}: {key}")
        logger.info("Updated %s(%s).%s", entity_path, key, name)

    def _delete(self, entity_path: str, key: EntityKey) -> None:
        es = _entity_set(entity_path)
        with self._connect() as conn:
            cur = conn.execute(f"DELETE FROM {es.table} WHERE id = ?", (key,))
        if cur.rowcount == 0:
            raise UnknownEntityError(f"Unknown key in {entity_path}: {key}")
        logger.info("Deleted %s(%s)", entity_path, key)


class SqliteEntityContext(EntityContext):
    """EntityContext over one row of a SqliteCatalogService."""

    def __init__(
        self, service: SqliteCatalogService, entity_path: str, row: Mapping[str, Any]
    ) -> None:
        self._service = service
        self._entity_path = entity_path
        self._row = dict(row)
        self._deleted = False

    @property
    def entity_path(self) -> str:
        return self._entity_path

    @property
    def key(self) -> EntityKey:
        return str(self._row["id"])

    def _check_live(self) -> None:
        if self._deleted:
            raise StaleContextError(f"{self._entity_path}({self.key}) was deleted.")

    def get_object(self) -> Mapping[str, Any]:
        self._check_live()
        return dict(self._row)

    def get_property(self, name: str) -> Any:
        self._check_live()
        return self._row[name]

    async def set_property(self, name: str, value: Any) -> None:
        self._check_live()
        self._service._update(self._entity_path, self.key, name, value)
        self._row[name] = value

    async def delete(self) -> None:
        self._check_live()
        self._service._delete(self._entity_path, self.key)
        self._deleted = True

    def __repr__(self) -> str:
        return f"SqliteEntityContext({self._entity_path}({self.key}))"


@dataclass(slots=True)
class SqliteListBinding(ListBinding):
    """ListBinding that re-queries SQLite on every refresh."""

    service: SqliteCatalogService
    entity_path: str
    filters: tuple[Filter, ...]
    _contexts: list[SqliteEntityContext] = field(default_factory=list)
    _listeners: list[BindingListener] = field(default_factory=list)

    def contexts(self) -> Sequence[EntityContext]:
        return tuple(self._contexts)

    async def refresh(self) -> None:
        rows = self.service._query(self.entity_path, self.filters)
        self._contexts = [SqliteEntityContext(self.service, self.entity_path, r) for r in rows]
        logger.debug("Refreshed %s: %d row(s)", self.entity_path, len(rows))
        for listener in list(self._listeners):
            listener(self)

    def add_listener(self, listener: BindingListener) -> None:
        self._listeners.append(listener)


def open_catalog_store(data_root: Path | None = None) -> SqliteCatalogService:
    """
    Convenience constructor that resolves the data root.

    Parameters
    ----------
    data_root:
        Optional override for the booklist data root.

    Returns
    -------
    SqliteCatalogService
        Ready-to-use SQLite-backed service.
    """
    return SqliteCatalogService(db_path=catalog_db_path(data_root))
