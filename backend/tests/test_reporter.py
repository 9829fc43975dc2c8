from __future__ import annotations

import math

import pytest

from readiness_quiz.pillars import PILLARS
from readiness_quiz.reporter import render_report, report_to_dict, summarize
from tests.conftest import make_record


def _cohort():
    return [
        make_record("a", {"numeracy": 10, "reading": 2, "computer": 8, "logic": 3, "communication": 5, "mindset": 7}, level=1, title="Ready to Start"),
        make_record("b", {"numeracy": 4, "reading": 1, "computer": 4, "logic": 8, "communication": 2, "mindset": 3}, level=2, title="Ready with Quick Prep"),
        make_record("c", {"numeracy": 6, "reading": 5, "computer": 10, "logic": 2, "communication": 1, "mindset": 6}, level=2, title="Ready with Quick Prep"),
        make_record("d", {"numeracy": 0, "reading": 0, "computer": 2, "logic": 5, "communication": 3, "mindset": 1}, level=5, title="Not Yet Ready"),
    ]


def test_empty_input_reports_zeros():
    report = summarize([])
    assert report.total == 0
    assert [s.level for s in report.readiness] == [1, 2, 3, 4, 5]
    assert all(s.count == 0 and s.percent == 0.0 for s in report.readiness)
    for stat in report.pillars:
        assert stat.weak_count == 0
        assert stat.weak_percent == 0.0
        assert stat.average == 0.0
        assert stat.average_percent == 0.0
        assert not math.isnan(stat.average)
    # all rates tie, so declaration order decides
    assert report.primary.name == "numeracy"
    assert report.secondary.name == "reading"


def test_weakness_rates_and_averages():
    report = summarize(_cohort())
    by_name = {s.name: s for s in report.pillars}

    assert report.total == 4
    assert by_name["reading"].weak_count == 3
    assert by_name["reading"].weak_percent == pytest.approx(75.0)
    for name in ("numeracy", "computer", "logic", "communication", "mindset"):
        assert by_name[name].weak_percent == pytest.approx(50.0)

    assert by_name["numeracy"].average == pytest.approx(5.0)
    assert by_name["numeracy"].average_percent == pytest.approx(50.0)
    assert by_name["reading"].average == pytest.approx(2.0)
    assert by_name["reading"].average_percent == pytest.approx(40.0)


def test_ranking_is_stable_on_ties():
    report = summarize(_cohort())
    assert [s.name for s in report.ranking] == ["reading", "numeracy", "computer", "logic", "communication", "mindset"]
    assert report.primary.name == "reading"
    assert report.secondary.name == "numeracy"


def test_readiness_distribution():
    shares = {s.level: s for s in summarize(_cohort()).readiness}
    assert shares[1].count == 1 and shares[1].percent == pytest.approx(25.0)
    assert shares[2].count == 2 and shares[2].percent == pytest.approx(50.0)
    assert shares[3].count == 0 and shares[3].percent == 0.0
    assert shares[5].title == "Not Yet Ready"


def test_unconfigured_levels_are_still_counted():
    records = _cohort() + [make_record("odd", {}, level=0, title="Unknown")]
    shares = summarize(records).readiness
    assert shares[-1].level == 0
    assert shares[-1].count == 1
    assert shares[-1].title == "Unknown"


def test_summarize_does_not_touch_input():
    records = _cohort()
    snapshot = list(records)
    summarize(records)
    assert records == snapshot


def test_pillar_order_follows_configuration():
    report = summarize(_cohort())
    assert [s.name for s in report.pillars] == [p.name for p in PILLARS]


def test_render_and_dict_output():
    report = summarize(_cohort())
    text = render_report(report)
    assert "PRIMARY WEAKNESS" in text
    assert "Reading:" in text
    assert "75% of students struggle with reading" in text

    data = report_to_dict(report)
    assert data["total"] == 4
    assert data["primary"]["name"] == "reading"

    assert "Total Assessments: 0" in render_report(summarize([]))
