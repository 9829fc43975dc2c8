from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from .db import Base
from .records import AssessmentRecord


class Assessment(Base):
	__tablename__ = "assessments"
	id = Column(Integer, primary_key=True, autoincrement=True)
	session_id = Column(String(128), unique=True, nullable=False, index=True)
	timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)

	# Out of 10, 5, 10, 8, 5, 7
	numeracy_score = Column(Integer)
	reading_score = Column(Integer)
	computer_score = Column(Integer)
	logic_score = Column(Integer)
	communication_score = Column(Integer)
	mindset_score = Column(Integer)

	readiness_level = Column(Integer)  # 1-5
	readiness_title = Column(Text)

	# SHA-256 of the client address, never the raw IP
	user_ip_hash = Column(String(64), nullable=True)
	consent_given = Column(Boolean, default=True)

	@classmethod
	def from_record(cls, record: AssessmentRecord) -> "Assessment":
		return cls(
			session_id=record.session_id,
			timestamp=record.timestamp,
			numeracy_score=record.numeracy_score,
			reading_score=record.reading_score,
			computer_score=record.computer_score,
			logic_score=record.logic_score,
			communication_score=record.communication_score,
			mindset_score=record.mindset_score,
			readiness_level=record.readiness_level,
			readiness_title=record.readiness_title,
			user_ip_hash=record.user_ip_hash,
			consent_given=record.consent_given,
		)

	def to_record(self) -> AssessmentRecord:
		return AssessmentRecord(
			session_id=self.session_id,
			timestamp=self.timestamp,
			numeracy_score=self.numeracy_score or 0,
			reading_score=self.reading_score or 0,
			computer_score=self.computer_score or 0,
			logic_score=self.logic_score or 0,
			communication_score=self.communication_score or 0,
			mindset_score=self.mindset_score or 0,
			readiness_level=self.readiness_level or 0,
			readiness_title=self.readiness_title or "",
			user_ip_hash=self.user_ip_hash,
			consent_given=self.consent_given,
		)
