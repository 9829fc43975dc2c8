"""Synthetic assessment records with enforced weakness patterns.

Each record is built in a fixed order: pick a readiness tier, draw base pillar
scores, shape them with the tier's one-sided clamps, then independently force
individual pillars weak. The two mechanisms may disagree (a tier-1 student can
still come out weak in reading); that is intended.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Sequence

from .pillars import Clamp, PillarSpec, ReadinessTier, SynthesisModel
from .records import AssessmentRecord

logger = logging.getLogger(__name__)

WINDOW = timedelta(days=30)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def select_tier(r: float, tiers: Sequence[ReadinessTier]) -> ReadinessTier:
    """Return the first tier whose cumulative probability reaches ``r``.

    Probabilities that sum short of 1.0 leave ``r`` above every cumulative
    value; that case resolves to the last (weakest) tier.
    """
    cumulative = 0.0
    for tier in tiers:
        cumulative += tier.probability
        if cumulative >= r:
            return tier
    return tiers[-1]


def effective_tier_probabilities(tiers: Sequence[ReadinessTier]) -> Dict[int, float]:
    """Probability mass ``select_tier`` actually assigns to each level for r ~ U[0, 1)."""
    out: Dict[int, float] = {}
    previous = 0.0
    cumulative = 0.0
    for tier in tiers:
        cumulative += tier.probability
        mass = max(0.0, min(cumulative, 1.0) - min(previous, 1.0))
        out[tier.level] = out.get(tier.level, 0.0) + mass
        previous = cumulative
    if cumulative < 1.0:
        last = tiers[-1].level
        out[last] = out.get(last, 0.0) + (1.0 - cumulative)
    return out


def _share_at_or_below(low: int, high: int, threshold: int) -> float:
    if threshold < low:
        return 0.0
    if threshold >= high:
        return 1.0
    return (threshold - low + 1) / (high - low + 1)


def natural_weak_rate(model: SynthesisModel, pillar: PillarSpec) -> float:
    """Exact chance a pillar lands at or below its threshold from tier shaping alone."""
    low, high = model.base_ranges[pillar.name]
    base = _share_at_or_below(low, high, pillar.weak_threshold)
    rate = 0.0
    for level, mass in effective_tier_probabilities(model.tiers).items():
        clamp = model.adjustments.get(level, {}).get(pillar.name)
        if clamp is None:
            weak = base
        else:
            drawn = _share_at_or_below(clamp.low, clamp.high, pillar.weak_threshold)
            if clamp.direction == "raise":
                weak = base * drawn
            else:
                weak = 1.0 - (1.0 - base) * (1.0 - drawn)
        rate += mass * weak
    return rate


def clamp_probability(model: SynthesisModel, pillar: PillarSpec) -> float:
    """Per-record probability of forcing ``pillar`` weak.

    Calibrated so that records already weak from tier shaping count towards the
    target: the population share at or below threshold converges to the target.
    """
    target = model.target(pillar.name)
    if not model.calibrate:
        return target
    natural = natural_weak_rate(model, pillar)
    if target <= natural:
        if 0.0 < target < natural:
            logger.warning(
                "Weakness target %.2f for %s is below its natural rate %.3f; not forcing",
                target, pillar.name, natural,
            )
        return 0.0
    return (target - natural) / (1.0 - natural)


class ScoreSynthesizer:
    """Generates synthetic students from an injected random source.

    Holds no state beyond the model, the precomputed clamp probabilities and its
    own ``random.Random``; independent instances may run concurrently.
    """

    def __init__(
        self,
        model: Optional[SynthesisModel] = None,
        rng: Optional[random.Random] = None,
        *,
        clock: Callable[[], datetime] = utcnow,
        prefix: str = "demo_",
    ) -> None:
        self.model = model or SynthesisModel()
        self.rng = rng or random.Random()
        self.clock = clock
        self.prefix = prefix
        self.clamp_probabilities: Dict[str, float] = {
            p.name: clamp_probability(self.model, p) for p in self.model.pillars
        }
        self._issued = 0

    def _randint(self, low: int, high: int) -> int:
        return self.rng.randint(low, high)

    def pick_tier(self) -> ReadinessTier:
        return select_tier(self.rng.random(), self.model.tiers)

    def draw_base_scores(self) -> Dict[str, int]:
        return {p.name: self._randint(*self.model.base_ranges[p.name]) for p in self.model.pillars}

    def shape_for_tier(self, scores: Dict[str, int], tier: ReadinessTier) -> Dict[str, int]:
        shaped = dict(scores)
        clamps: Dict[str, Clamp] = dict(self.model.adjustments.get(tier.level, {}))
        for pillar in self.model.pillars:
            clamp = clamps.get(pillar.name)
            if clamp is None:
                continue
            drawn = self._randint(clamp.low, clamp.high)
            if clamp.direction == "raise":
                shaped[pillar.name] = max(shaped[pillar.name], drawn)
            else:
                shaped[pillar.name] = min(shaped[pillar.name], drawn)
        return shaped

    def enforce_weakness(self, scores: Dict[str, int]) -> Dict[str, int]:
        enforced = dict(scores)
        for pillar in self.model.pillars:
            if self.rng.random() < self.clamp_probabilities[pillar.name]:
                enforced[pillar.name] = min(enforced[pillar.name], pillar.weak_threshold)
        return enforced

    def generate_scores(self, tier: ReadinessTier) -> Dict[str, int]:
        scores = self.draw_base_scores()
        scores = self.shape_for_tier(scores, tier)
        return self.enforce_weakness(scores)

    def _timestamp(self) -> datetime:
        end = self.clock().replace(microsecond=0)
        offset = int(self.rng.random() * WINDOW.total_seconds())
        return end - timedelta(seconds=offset)

    def _session_id(self) -> str:
        self._issued += 1
        return f"{self.prefix}{self._issued:03d}_{self.rng.getrandbits(48):012x}"

    def generate_record(self) -> AssessmentRecord:
        tier = self.pick_tier()
        scores = self.generate_scores(tier)
        return AssessmentRecord.from_scores(
            self._session_id(),
            self._timestamp(),
            scores,
            tier.level,
            tier.title,
            user_ip_hash=None,
            consent_given=True,
        )

    def generate_batch(self, count: int) -> List[AssessmentRecord]:
        return [self.generate_record() for _ in range(count)]
