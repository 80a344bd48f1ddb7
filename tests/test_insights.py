"""Unit tests for the insight analyzer."""

from advocate_matching.domain.models import Advocate
from advocate_matching.matching import ConfidenceTier, MatchResult, analyze_insights


def _result(advocate_id, score, confidence, reasons):
    return MatchResult(
        advocate=Advocate(id=advocate_id),
        score=score,
        reasons=tuple(reasons),
        confidence=confidence,
    )


def test_empty_result_set():
    insights = analyze_insights([])

    assert insights.total_matches == 0
    assert insights.average_score == 0
    assert insights.top_reasons == ()
    assert insights.tier_counts == {"high": 0, "medium": 0, "low": 0}


def test_tier_counts_sum_to_total():
    matches = [
        _result("a", 90, ConfidenceTier.HIGH, ["Exact industry match"]),
        _result("b", 82, ConfidenceTier.HIGH, ["Exact industry match"]),
        _result("c", 65, ConfidenceTier.MEDIUM, ["Partial industry match"]),
        _result("d", 31, ConfidenceTier.LOW, []),
    ]

    insights = analyze_insights(matches)

    assert insights.total_matches == 4
    assert insights.high_confidence_count == 2
    assert insights.medium_confidence_count == 1
    assert insights.low_confidence_count == 1
    assert sum(insights.tier_counts.values()) == insights.total_matches


def test_average_score_rounds_half_up():
    matches = [
        _result("a", 61, ConfidenceTier.MEDIUM, []),
        _result("b", 60, ConfidenceTier.MEDIUM, []),
    ]
    assert analyze_insights(matches).average_score == 61


def test_top_reasons_by_frequency():
    matches = [
        _result("a", 90, ConfidenceTier.HIGH, ["High availability", "Exact industry match"]),
        _result("b", 80, ConfidenceTier.HIGH, ["Exact industry match"]),
        _result("c", 70, ConfidenceTier.MEDIUM, ["Exact industry match", "Exact region match"]),
        _result("d", 60, ConfidenceTier.MEDIUM, ["Exact region match"]),
    ]

    insights = analyze_insights(matches)

    assert insights.top_reasons == (
        "Exact industry match",
        "Exact region match",
        "High availability",
    )


def test_equal_frequency_keeps_first_seen_order():
    matches = [
        _result("a", 50, ConfidenceTier.LOW, ["Zeta reason", "Alpha reason"]),
        _result("b", 50, ConfidenceTier.LOW, ["Alpha reason", "Zeta reason"]),
    ]
    assert analyze_insights(matches).top_reasons == ("Zeta reason", "Alpha reason")


def test_top_reasons_are_limited():
    reasons = [f"Reason {i}" for i in range(8)]
    matches = [_result("a", 50, ConfidenceTier.LOW, reasons)]

    assert len(analyze_insights(matches).top_reasons) == 5
    assert analyze_insights(matches, limit=2).top_reasons == ("Reason 0", "Reason 1")


def test_insights_from_engine_results(engine, complete_advocate, complete_opportunity, advocate_a):
    response = engine.match([complete_advocate, advocate_a], complete_opportunity, {"min_score": 0})

    insights = analyze_insights(response.matches)

    assert insights.total_matches == 2
    assert insights.high_confidence_count == 1
    assert insights.top_reasons[0] == "Exact industry match"
