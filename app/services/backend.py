"""Generic query client over the club's relational store.

The view services only ever see what a managed backend would hand back: lists
of plain row dictionaries, or a `BackendError` carrying the store's message.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BackendError
from app.models import EquipmentSetup, Match, Tournament, TournamentParticipant, User

logger = logging.getLogger(__name__)

TABLES = {
    "users": User,
    "tournaments": Tournament,
    "tournament_participants": TournamentParticipant,
    "matches": Match,
    "equipment_setups": EquipmentSetup,
}

# Relationship name -> columns to embed from the related row
Embeds = Mapping[str, Sequence[str]]


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class BackendClient:
    def __init__(self, db: Session):
        self.db = db
        self._transaction_depth = 0

    def _model(self, table: str):
        model = TABLES.get(table)
        if model is None:
            raise BackendError(f'relation "{table}" does not exist', table=table)
        return model

    def _column(self, model, table: str, name: str):
        if name not in model.__table__.columns:
            raise BackendError(f'column {table}.{name} does not exist', table=table)
        return getattr(model, name)

    @staticmethod
    def _to_row(obj, columns: Sequence[str], embed: Optional[Embeds] = None) -> Dict[str, Any]:
        row = {name: getattr(obj, name) for name in columns}
        for relation, relation_columns in (embed or {}).items():
            related = getattr(obj, relation)
            row[relation] = None if related is None else {name: getattr(related, name) for name in relation_columns}
        return row

    def _commit(self):
        if not self._transaction_depth:
            self.db.commit()

    @contextmanager
    def transaction(self) -> Iterator["BackendClient"]:
        """Group several mutations so they commit, or roll back, together."""
        self._transaction_depth += 1
        try:
            yield self
        except Exception:
            self._transaction_depth -= 1
            self.db.rollback()
            raise
        self._transaction_depth -= 1
        if not self._transaction_depth:
            try:
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise BackendError(_error_message(e))

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Mapping[str, Any]] = None,
        any_of: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        embed: Optional[Embeds] = None,
    ) -> List[Dict[str, Any]]:
        """Return rows of `table` matching every `filters` equality and, when given, any one of `any_of`."""
        model = self._model(table)
        columns = list(columns or model.__table__.columns.keys())
        for name in columns:
            self._column(model, table, name)

        query = self.db.query(model)
        for name, value in (filters or {}).items():
            query = query.filter(self._column(model, table, name) == value)
        if any_of:
            query = query.filter(or_(*(self._column(model, table, name) == value for name, value in any_of.items())))
        if order_by:
            column = self._column(model, table, order_by)
            query = query.order_by(column.desc().nulls_last() if descending else column.asc().nulls_last())
        if limit:
            query = query.limit(limit)

        try:
            return [self._to_row(obj, columns, embed) for obj in query.all()]
        except SQLAlchemyError as e:
            logger.warning("select on %s failed: %s", table, e)
            raise BackendError(_error_message(e), table=table)

    def select_one(self, table: str, **kwargs) -> Dict[str, Any]:
        """Like `select`, but exactly one row must match."""
        rows = self.select(table, **kwargs)
        if len(rows) != 1:
            raise BackendError("JSON object requested, multiple (or no) rows returned", table=table)
        return rows[0]

    def insert(self, table: str, row: Mapping[str, Any], columns: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        model = self._model(table)
        for name in row:
            self._column(model, table, name)
        obj = model(**row)
        try:
            self.db.add(obj)
            self.db.flush()
            self._commit()
            self.db.refresh(obj)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.info("insert into %s rejected: %s", table, _error_message(e))
            raise BackendError(_error_message(e), table=table)
        return self._to_row(obj, list(columns or model.__table__.columns.keys()))

    def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        filters: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Apply `patch` to every row matching `filters` and return the updated rows."""
        model = self._model(table)
        query = self.db.query(model)
        for name, value in filters.items():
            query = query.filter(self._column(model, table, name) == value)
        for name in patch:
            self._column(model, table, name)
        try:
            rows = query.all()
            for obj in rows:
                for key, value in patch.items():
                    setattr(obj, key, value)
            self.db.flush()
            self._commit()
            for obj in rows:
                self.db.refresh(obj)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.info("update of %s rejected: %s", table, _error_message(e))
            raise BackendError(_error_message(e), table=table)
        return [self._to_row(obj, list(columns or model.__table__.columns.keys())) for obj in rows]

    def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        """Delete the rows matching `filters`. Matching nothing is not an error."""
        model = self._model(table)
        query = self.db.query(model)
        for name, value in filters.items():
            query = query.filter(self._column(model, table, name) == value)
        try:
            deleted = query.delete(synchronize_session=False)
            self._commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.info("delete from %s rejected: %s", table, _error_message(e))
            raise BackendError(_error_message(e), table=table)
        return deleted
