from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from .pillars import PILLARS


@dataclass(frozen=True)
class AssessmentRecord:
    """One finished assessment, synthetic or live. Never updated once stored."""

    session_id: str
    timestamp: datetime
    numeracy_score: int
    reading_score: int
    computer_score: int
    logic_score: int
    communication_score: int
    mindset_score: int
    readiness_level: int
    readiness_title: str
    user_ip_hash: Optional[str] = None
    consent_given: Optional[bool] = True

    def score(self, pillar: str) -> int:
        return getattr(self, f"{pillar}_score")

    def scores(self) -> Dict[str, int]:
        return {p.name: self.score(p.name) for p in PILLARS}

    @classmethod
    def from_scores(
        cls,
        session_id: str,
        timestamp: datetime,
        scores: Dict[str, int],
        readiness_level: int,
        readiness_title: str,
        *,
        user_ip_hash: Optional[str] = None,
        consent_given: Optional[bool] = True,
    ) -> "AssessmentRecord":
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            readiness_level=readiness_level,
            readiness_title=readiness_title,
            user_ip_hash=user_ip_hash,
            consent_given=consent_given,
            **{f"{p.name}_score": int(scores[p.name]) for p in PILLARS},
        )
