"""Print the pattern analysis for everything currently stored.

Usage:
    readiness-verify [--database-url sqlite:///./assessments.db]
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..logging_config import setup_logging
from ..reporter import render_report, summarize
from ..settings import settings
from ..store import AssessmentStore


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze weakness patterns in stored assessments")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    url = args.database_url or settings.database_location()
    with AssessmentStore(url) as store:
        report = summarize(store.all())
    print(f"Database: {url}")
    print(render_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
