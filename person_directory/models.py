"""
Database tables for the Directory Store.
"""
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

from .core.records import PersonRecord, SearchLogEntry, SearchType

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Person(Base):
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    phone_number = Column(String(64), nullable=True)
    email = Column(String(255), nullable=True)
    social_media = Column(Text, nullable=True)
    nid_number = Column(String(64), nullable=True)
    photo_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def to_record(self) -> PersonRecord:
        return PersonRecord(
            id=self.id,
            name=self.name,
            address=self.address,
            phone_number=self.phone_number,
            email=self.email,
            social_media=self.social_media,
            nid_number=self.nid_number,
            photo_url=self.photo_url,
            created_at=self.created_at,
        )

    def __repr__(self):
        return f"<Person(id={self.id}, name={self.name!r})>"


class SearchLog(Base):
    __tablename__ = "search_logs"
    __table_args__ = (
        CheckConstraint("type IN ('text', 'image')", name="ck_search_logs_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    query = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def to_record(self) -> SearchLogEntry:
        return SearchLogEntry(
            id=self.id,
            query=self.query,
            type=SearchType(self.type),
            created_at=self.created_at,
        )

    def __repr__(self):
        return f"<SearchLog(id={self.id}, type={self.type}, query={self.query[:30]!r})>"
