"""Aggregate patterns over stored assessments.

``summarize`` is a pure read: it never touches the records it is given or the
store they came from. An empty input yields a fully zeroed report.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .pillars import PILLARS, TIERS, PillarSpec, ReadinessTier
from .records import AssessmentRecord


@dataclass(frozen=True)
class TierShare:
    level: int
    title: str
    count: int
    percent: float


@dataclass(frozen=True)
class PillarStat:
    name: str
    label: str
    max_score: int
    weak_threshold: int
    weak_count: int
    weak_percent: float
    average: float
    average_percent: float


@dataclass(frozen=True)
class PatternReport:
    total: int
    readiness: Tuple[TierShare, ...]
    pillars: Tuple[PillarStat, ...]
    ranking: Tuple[PillarStat, ...]
    primary: Optional[PillarStat]
    secondary: Optional[PillarStat]


def _percent(part: float, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100.0


def _readiness_distribution(records: Sequence[AssessmentRecord], tiers: Sequence[ReadinessTier]) -> Tuple[TierShare, ...]:
    counts: Dict[int, int] = {}
    titles: Dict[int, str] = {t.level: t.title for t in tiers}
    for rec in records:
        counts[rec.readiness_level] = counts.get(rec.readiness_level, 0) + 1
        titles.setdefault(rec.readiness_level, rec.readiness_title or "")
    levels = [t.level for t in tiers] + sorted(lvl for lvl in counts if lvl not in {t.level for t in tiers})
    total = len(records)
    return tuple(
        TierShare(level=lvl, title=titles[lvl], count=counts.get(lvl, 0), percent=_percent(counts.get(lvl, 0), total))
        for lvl in levels
    )


def _pillar_stat(records: Sequence[AssessmentRecord], pillar: PillarSpec) -> PillarStat:
    total = len(records)
    scores = [rec.score(pillar.name) for rec in records]
    weak = sum(1 for s in scores if s <= pillar.weak_threshold)
    average = sum(scores) / total if total else 0.0
    return PillarStat(
        name=pillar.name,
        label=pillar.label,
        max_score=pillar.max_score,
        weak_threshold=pillar.weak_threshold,
        weak_count=weak,
        weak_percent=_percent(weak, total),
        average=average,
        average_percent=average / pillar.max_score * 100.0,
    )


def summarize(
    records: Sequence[AssessmentRecord],
    pillars: Sequence[PillarSpec] = PILLARS,
    tiers: Sequence[ReadinessTier] = TIERS,
) -> PatternReport:
    stats = tuple(_pillar_stat(records, p) for p in pillars)
    # sorted() is stable: equal rates keep declaration order
    ranking = tuple(sorted(stats, key=lambda s: s.weak_percent, reverse=True))
    return PatternReport(
        total=len(records),
        readiness=_readiness_distribution(records, tiers),
        pillars=stats,
        ranking=ranking,
        primary=ranking[0] if ranking else None,
        secondary=ranking[1] if len(ranking) > 1 else None,
    )


def report_to_dict(report: PatternReport) -> Dict[str, Any]:
    return asdict(report)


def _bar(percent: float, char: str = "#") -> str:
    return char * int(round(percent / 2))


def render_report(report: PatternReport) -> str:
    lines: List[str] = []
    rule = "=" * 60
    thin = "-" * 60
    lines += [rule, "BOOTCAMP ASSESSMENT DATA ANALYSIS", rule, "", f"Total Assessments: {report.total}", ""]

    lines += [thin, "READINESS LEVEL DISTRIBUTION", thin]
    for share in report.readiness:
        lines.append(
            f"  Level {share.level}: {share.count:>3} students ({share.percent:5.1f}%) {_bar(share.percent)}"
        )
        lines.append(f"         {share.title}")
    lines.append("")

    lines += [thin, "PILLAR WEAKNESS ANALYSIS (Sorted by Struggle Rate)", thin]
    for index, stat in enumerate(report.ranking):
        marker = " <-- PRIMARY WEAKNESS" if index == 0 else (" <-- SECONDARY" if index == 1 else "")
        lines.append("")
        lines.append(f"  {stat.label}:{marker}")
        lines.append(f"    Struggling: {stat.weak_count} students ({stat.weak_percent:.1f}%) {_bar(stat.weak_percent)}")
        lines.append(f"    Average:    {stat.average:.1f}/{stat.max_score} ({stat.average_percent:.1f}%)")
    lines.append("")

    if report.primary and report.secondary:
        primary, secondary = report.primary, report.secondary
        lines += [rule, "KEY INSIGHTS", rule, ""]
        lines.append("  PRIMARY FINDING:")
        lines.append(f'  "{primary.weak_percent:.0f}% of students struggle with {primary.label.lower()}"')
        lines.append("")
        lines.append("  SECONDARY FINDING:")
        lines.append(f'  "{secondary.weak_percent:.0f}% of students struggle with {secondary.label.lower()}"')
        lines.append("")

    lines += [thin, "AVERAGE SCORES BY PILLAR", thin]
    for stat in sorted(report.pillars, key=lambda s: s.average_percent):
        filled = int(round(stat.average_percent / 2))
        lines.append(f"  {stat.label:<14} {'█' * filled}{'░' * (50 - filled)} {stat.average_percent:.0f}%")
    lines.append("")
    return "\n".join(lines)
