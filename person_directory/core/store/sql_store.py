"""
SQLAlchemy implementation of the Directory Store.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ...models import Base, Person, SearchLog
from ..exceptions import QueryError
from ..query_builder import CASEFOLD_FUNCTION, build_person_filter
from ..records import PersonRecord, SearchLogEntry, SearchType
from .base import DirectoryStore

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str) -> Engine:
    """
    Create an engine for the Directory Store.

    SQLite connections get a Unicode-aware ``casefold()`` SQL function, since
    SQLite's own ``lower()`` only folds ASCII. In-memory SQLite shares one
    connection.
    """
    kwargs: Dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _register_casefold(dbapi_connection, connection_record):
            dbapi_connection.create_function(CASEFOLD_FUNCTION, 1, _casefold, deterministic=True)

    return engine


def _casefold(value):
    return None if value is None else str(value).casefold()


class SqlDirectoryStore(DirectoryStore):
    """Directory Store backed by a relational database."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=engine, expire_on_commit=False)
        self._ensure_tables()

    @classmethod
    def from_url(cls, database_url: str) -> "SqlDirectoryStore":
        return cls(create_store_engine(database_url))

    def _ensure_tables(self):
        """Create the persons and search_logs tables if they don't exist."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Error ensuring tables: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def search_persons(self, term: str) -> List[PersonRecord]:
        try:
            with self.Session() as session:
                stmt = (
                    select(Person)
                    .where(build_person_filter(term, self.engine.dialect.name))
                    .order_by(Person.id)
                )
                return [person.to_record() for person in session.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Error searching persons: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def list_persons(self, limit: int) -> List[PersonRecord]:
        try:
            with self.Session() as session:
                stmt = select(Person).order_by(Person.id).limit(limit)
                return [person.to_record() for person in session.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Error listing persons: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def insert_person(self, values: Dict[str, Any]) -> PersonRecord:
        try:
            with self.Session() as session:
                person = Person(**values)
                session.add(person)
                session.commit()
                return person.to_record()
        except SQLAlchemyError as e:
            logger.error(f"Error inserting person: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def count_persons(self) -> int:
        return self._count(Person)

    def insert_search_log(self, query: str, search_type: SearchType) -> SearchLogEntry:
        try:
            with self.Session() as session:
                entry = SearchLog(query=query, type=SearchType(search_type).value)
                session.add(entry)
                session.commit()
                return entry.to_record()
        except SQLAlchemyError as e:
            logger.error(f"Error inserting search log: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def count_search_logs(self) -> int:
        return self._count(SearchLog)

    def recent_search_logs(self, limit: int) -> List[SearchLogEntry]:
        try:
            with self.Session() as session:
                stmt = (
                    select(SearchLog)
                    .order_by(SearchLog.created_at.desc(), SearchLog.id.desc())
                    .limit(limit)
                )
                return [entry.to_record() for entry in session.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Error reading recent search logs: {e}", exc_info=True)
            raise QueryError(str(e)) from e

    def _count(self, model) -> int:
        try:
            with self.Session() as session:
                return session.scalar(select(func.count()).select_from(model)) or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting {model.__tablename__}: {e}", exc_info=True)
            raise QueryError(str(e)) from e
