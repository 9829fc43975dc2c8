"""SQLite-backed storage for assessment records.

One ``AssessmentStore`` is created per process (or per test) and handed to
whoever needs it. Writes are serialized through a lock; every mutating call
commits before returning.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from .db import Base, make_engine, make_sessionmaker
from .models import Assessment
from .records import AssessmentRecord

logger = logging.getLogger(__name__)


class AssessmentStore:
    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.engine = make_engine(database_url)
        self.SessionLocal = make_sessionmaker(self.engine)
        self._lock = threading.Lock()

    def open(self) -> "AssessmentStore":
        # create_all is idempotent: opens an existing file or creates the schema
        Base.metadata.create_all(bind=self.engine)
        logger.info("Assessment store ready at %s", self.database_url)
        return self

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self) -> "AssessmentStore":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    def insert(self, record: AssessmentRecord) -> bool:
        """Store one record; failures are logged and reported as False."""
        with self._lock:
            db = self.SessionLocal()
            try:
                db.add(Assessment.from_record(record))
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                logger.error("Insert failed for %s: %s", record.session_id, exc)
                return False
            finally:
                db.close()
        logger.debug("Assessment %s inserted", record.session_id)
        return True

    def insert_many(self, records: Iterable[AssessmentRecord]) -> int:
        """Store a batch and return how many rows made it.

        The batch is tried in one transaction first; if that fails every row is
        retried on its own so one bad row cannot sink the rest.
        """
        batch = list(records)
        if not batch:
            return 0
        with self._lock:
            db = self.SessionLocal()
            try:
                db.add_all(Assessment.from_record(r) for r in batch)
                db.commit()
                return len(batch)
            except SQLAlchemyError as exc:
                db.rollback()
                logger.warning("Batch insert of %d rows failed (%s); retrying row by row", len(batch), exc)
            finally:
                db.close()
        return sum(1 for r in batch if self.insert(r))

    def all(self) -> List[AssessmentRecord]:
        db = self.SessionLocal()
        try:
            rows = db.execute(select(Assessment).order_by(Assessment.timestamp.desc())).scalars().all()
            return [row.to_record() for row in rows]
        finally:
            db.close()

    def count(self) -> int:
        db = self.SessionLocal()
        try:
            return int(db.execute(select(func.count()).select_from(Assessment)).scalar_one())
        finally:
            db.close()

    def delete_by_prefix(self, prefix: str) -> int:
        if not prefix:
            raise ValueError("refusing to delete without a session prefix")
        with self._lock:
            db = self.SessionLocal()
            try:
                res = db.execute(delete(Assessment).where(Assessment.session_id.startswith(prefix, autoescape=True)))
                db.commit()
                return res.rowcount or 0
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()
