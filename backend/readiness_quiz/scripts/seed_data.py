"""Regenerate the synthetic demo cohort.

Previous synthetic rows are removed first; live quiz rows are kept.

Usage:
    readiness-seed --count 100 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..cleanup import purge_synthetic_batch
from ..logging_config import setup_logging
from ..pillars import SynthesisModel
from ..reporter import PatternReport, summarize
from ..settings import settings
from ..store import AssessmentStore
from ..synthesizer import ScoreSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    removed: int
    inserted: int
    failed: int


def seed_database(store: AssessmentStore, synthesizer: ScoreSynthesizer, count: int) -> SeedResult:
    removed = purge_synthetic_batch(store, synthesizer.prefix)
    inserted = failed = 0
    for i in range(count):
        record = synthesizer.generate_record()
        if store.insert(record):
            inserted += 1
        else:
            failed += 1
        if (i + 1) % 20 == 0:
            logger.info("Generated %d records...", i + 1)
    if failed:
        logger.warning("%d of %d synthetic records could not be stored", failed, count)
    return SeedResult(removed=removed, inserted=inserted, failed=failed)


def verification_lines(report: PatternReport, model: SynthesisModel) -> List[str]:
    lines = [f"Total assessments: {report.total}"]
    for stat in report.pillars:
        target = model.target(stat.name)
        lines.append(
            f"{stat.label} weakness: {stat.weak_count} students ({stat.weak_percent:.0f}%) - Target: {target * 100:.0f}%"
        )
    lines.append("")
    lines.append("Readiness level distribution:")
    for share in report.readiness:
        if share.count:
            lines.append(f"  Level {share.level} ({share.title}): {share.count} students ({share.percent:.0f}%)")
    return lines


def build_model(calibrate: bool = True) -> SynthesisModel:
    model = SynthesisModel(calibrate=calibrate)
    if settings.weakness_targets:
        model = model.with_targets(settings.weakness_targets)
    return model


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the assessment database with synthetic demo records")
    parser.add_argument("--count", type=int, default=settings.seed_count, help="Number of records to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible cohort")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    parser.add_argument("--prefix", default=settings.synthetic_prefix, help="Session id prefix marking synthetic rows")
    parser.add_argument(
        "--uncalibrated", action="store_true",
        help="Force pillars weak with the raw target probability instead of calibrating",
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    if args.count < 0:
        parser.error("--count must be non-negative")

    model = build_model(calibrate=not args.uncalibrated)
    synthesizer = ScoreSynthesizer(model, random.Random(args.seed), prefix=args.prefix)
    url = args.database_url or settings.database_location()

    with AssessmentStore(url) as store:
        logger.info("Seeding %d synthetic records into %s", args.count, url)
        result = seed_database(store, synthesizer, args.count)
        report = summarize(store.all(), model.pillars, model.tiers)

    print("=" * 50)
    print("SEED DATA COMPLETE")
    print("=" * 50)
    print(f"Removed {result.removed} previous demo records, inserted {result.inserted}, failed {result.failed}")
    print()
    print("\n".join(verification_lines(report, model)))
    return 0 if result.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
