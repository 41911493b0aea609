"""
Persistence for class records: a SQLAlchemy store and an in-memory test implementation.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Protocol

from sqlalchemy import Column, Float, Integer, String, create_engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.types import ClassRecord

logger = logging.getLogger(__name__)


class ClassRepository(Protocol):
    """Interface for class record storage."""

    def find_or_create(self, record: ClassRecord) -> ClassRecord:
        ...

    def get(self, index: str) -> Optional[ClassRecord]:
        ...

    def all(self) -> list[ClassRecord]:
        ...


class InMemoryClassRepository:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        # dicts keep insertion order
        self.records: Dict[str, ClassRecord] = {}

    def find_or_create(self, record: ClassRecord) -> ClassRecord:
        existing = self.records.get(record.index)
        if existing is not None:
            return existing
        now = time.time()
        stored = ClassRecord(
            index=record.index,
            name=record.name,
            url=record.url,
            created_at=now,
            updated_at=now,
        )
        self.records[record.index] = stored
        return stored

    def get(self, index: str) -> Optional[ClassRecord]:
        return self.records.get(index)

    def all(self) -> list[ClassRecord]:
        return list(self.records.values())

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.records.clear()


class SqlClassRepository:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlClassRepository")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "ClassRow") -> ClassRecord:
        return ClassRecord(
            index=row.index,
            name=row.name,
            url=row.url,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _find_row(self, session: Session, index: str) -> Optional["ClassRow"]:
        stmt = select(ClassRow).where(ClassRow.index == index)
        return session.execute(stmt).scalar_one_or_none()

    def find_or_create(self, record: ClassRecord) -> ClassRecord:
        with self.Session() as session:
            row = self._find_row(session, record.index)
            if row:
                return self._to_record(row)

            now = time.time()
            row = ClassRow(
                index=record.index,
                name=record.name,
                url=record.url,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                # Another writer inserted the same index first; keep theirs.
                session.rollback()
                logger.info("Class %s was created concurrently", record.index)
                row = self._find_row(session, record.index)
                if row is None:
                    raise
                return self._to_record(row)
            session.refresh(row)
            return self._to_record(row)

    def get(self, index: str) -> Optional[ClassRecord]:
        with self.Session() as session:
            row = self._find_row(session, index)
            return self._to_record(row) if row else None

    def all(self) -> list[ClassRecord]:
        with self.Session() as session:
            rows = session.execute(select(ClassRow).order_by(ClassRow.id.asc()))
            return [self._to_record(row) for row in rows.scalars()]


Base = declarative_base()


class ClassRow(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    index = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    url = Column(String, nullable=False)
    created_at = Column(Float, nullable=False)
    updated_at = Column(Float, nullable=False)
