"""Static probability model behind the synthetic assessment data.

Six skill pillars, five readiness tiers, the base score ranges every synthetic
student starts from, the per-tier score shaping, and the per-pillar weakness
targets the generated population should reproduce.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple


@dataclass(frozen=True)
class PillarSpec:
    name: str
    label: str
    max_score: int
    weak_threshold: int

    def __post_init__(self) -> None:
        if self.max_score <= 0:
            raise ValueError(f"{self.name}: max_score must be positive")
        if not 0 <= self.weak_threshold < self.max_score:
            raise ValueError(f"{self.name}: weak_threshold must be in [0, max_score)")


@dataclass(frozen=True)
class ReadinessTier:
    level: int
    title: str
    probability: float


@dataclass(frozen=True)
class Clamp:
    """One-sided adjustment against a fresh draw from ``[low, high]``.

    ``raise`` keeps the larger of the score and the draw, ``lower`` the smaller.
    """

    direction: str
    low: int
    high: int

    def __post_init__(self) -> None:
        if self.direction not in ("raise", "lower"):
            raise ValueError(f"unknown clamp direction {self.direction!r}")
        if self.low > self.high:
            raise ValueError("clamp range is empty")


PILLARS: Tuple[PillarSpec, ...] = (
    PillarSpec("numeracy", "Numeracy", 10, 4),
    PillarSpec("reading", "Reading", 5, 2),
    PillarSpec("computer", "Computer", 10, 4),
    PillarSpec("logic", "Logic", 8, 3),
    PillarSpec("communication", "Communication", 5, 2),
    PillarSpec("mindset", "Mindset", 7, 3),
)

# Bell curve centred on level 2
TIERS: Tuple[ReadinessTier, ...] = (
    ReadinessTier(1, "Ready to Start", 0.15),
    ReadinessTier(2, "Ready with Quick Prep", 0.40),
    ReadinessTier(3, "Need Foundation Work", 0.25),
    ReadinessTier(4, "Need Comprehensive Prep", 0.15),
    ReadinessTier(5, "Not Yet Ready", 0.05),
)

# Nobody starts from zero before tier shaping
BASE_RANGES: Dict[str, Tuple[int, int]] = {
    "numeracy": (2, 10),
    "reading": (1, 5),
    "computer": (2, 10),
    "logic": (2, 8),
    "communication": (1, 5),
    "mindset": (2, 7),
}

TIER_ADJUSTMENTS: Dict[int, Dict[str, Clamp]] = {
    1: {
        "numeracy": Clamp("raise", 7, 10),
        "reading": Clamp("raise", 4, 5),
        "computer": Clamp("raise", 7, 10),
        "logic": Clamp("raise", 6, 8),
        "communication": Clamp("raise", 4, 5),
        "mindset": Clamp("raise", 5, 7),
    },
    2: {
        "numeracy": Clamp("raise", 5, 8),
        "computer": Clamp("raise", 5, 8),
        "mindset": Clamp("raise", 4, 6),
    },
    3: {},
    4: {
        "numeracy": Clamp("lower", 3, 6),
        "reading": Clamp("lower", 1, 3),
        "logic": Clamp("lower", 2, 4),
        "communication": Clamp("lower", 1, 3),
    },
    5: {
        "numeracy": Clamp("lower", 1, 4),
        "reading": Clamp("lower", 0, 2),
        "computer": Clamp("lower", 1, 4),
        "logic": Clamp("lower", 1, 3),
        "communication": Clamp("lower", 0, 2),
        "mindset": Clamp("lower", 1, 3),
    },
}

WEAKNESS_TARGETS: Dict[str, float] = {
    "reading": 0.68,
    "communication": 0.62,
    "logic": 0.45,
    "numeracy": 0.30,
    "computer": 0.25,
    "mindset": 0.20,
}


@dataclass(frozen=True)
class SynthesisModel:
    """Everything the synthesizer needs, validated once up front.

    Tier probabilities need not sum to 1.0; tier
    selection falls back to the weakest tier when they come up short.
    """

    pillars: Tuple[PillarSpec, ...] = PILLARS
    tiers: Tuple[ReadinessTier, ...] = TIERS
    base_ranges: Mapping[str, Tuple[int, int]] = field(default_factory=lambda: dict(BASE_RANGES))
    adjustments: Mapping[int, Mapping[str, Clamp]] = field(default_factory=lambda: dict(TIER_ADJUSTMENTS))
    weakness_targets: Mapping[str, float] = field(default_factory=lambda: dict(WEAKNESS_TARGETS))
    calibrate: bool = True

    def __post_init__(self) -> None:
        if not self.tiers:
            raise ValueError("at least one readiness tier is required")
        names = {p.name for p in self.pillars}
        for pillar in self.pillars:
            if pillar.name not in self.base_ranges:
                raise ValueError(f"no base range for pillar {pillar.name}")
            low, high = self.base_ranges[pillar.name]
            if not 0 <= low <= high <= pillar.max_score:
                raise ValueError(f"{pillar.name}: base range must lie within [0, {pillar.max_score}]")
        for level, clamps in self.adjustments.items():
            for name, clamp in clamps.items():
                if name not in names:
                    raise ValueError(f"tier {level} adjusts unknown pillar {name}")
                pillar = self.pillar(name)
                if clamp.low < 0 or clamp.high > pillar.max_score:
                    raise ValueError(f"tier {level} {name}: clamp range must lie within [0, {pillar.max_score}]")
        for name, target in self.weakness_targets.items():
            if name not in names:
                raise ValueError(f"weakness target for unknown pillar {name}")
            if not 0.0 <= target <= 1.0:
                raise ValueError(f"{name}: weakness target must be in [0, 1]")

    def pillar(self, name: str) -> PillarSpec:
        for p in self.pillars:
            if p.name == name:
                return p
        raise KeyError(name)

    def target(self, name: str) -> float:
        return float(self.weakness_targets.get(name, 0.0))

    def with_targets(self, overrides: Mapping[str, float], *, replace: bool = False) -> "SynthesisModel":
        targets = {} if replace else dict(self.weakness_targets)
        targets.update(overrides)
        return SynthesisModel(
            pillars=self.pillars,
            tiers=self.tiers,
            base_ranges=self.base_ranges,
            adjustments=self.adjustments,
            weakness_targets=targets,
            calibrate=self.calibrate,
        )


def tier_title(level: int, tiers: Tuple[ReadinessTier, ...] = TIERS) -> str:
    for t in tiers:
        if t.level == level:
            return t.title
    return ""
