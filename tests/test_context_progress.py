from __future__ import annotations

from clp_core.context import compare_contexts
from clp_core.progress import build_progress, detect_milestones, growth_indicators
from clp_core.recommendations import (
    consolidation_status,
    contextual_recommendations,
    next_assessment_recommendations,
)
from tests.conftest import flat_scores, parent, source, teacher


def test_home_advantaged_pattern():
    home = {"Communication": 4.5, "Collaboration": 4.5, "Content": 4.5, "Math": 2.0}
    school = {"Communication": 2.5, "Collaboration": 2.5, "Content": 2.5, "Math": 2.0}
    out = compare_contexts(home, school)
    assert out.significant_differences == ["Communication", "Collaboration", "Content"]
    assert out.pattern == "home_advantaged"
    assert out.recommendations_needed
    assert out.differences["Math"] == 0.0


def test_balanced_when_sides_split():
    home = {"Communication": 5.0, "Math": 1.0}
    school = {"Communication": 2.0, "Math": 4.0}
    out = compare_contexts(home, school)
    assert out.pattern == "balanced"
    assert not out.recommendations_needed


def test_exact_threshold_is_not_significant():
    out = compare_contexts({"Math": 4.0}, {"Math": 2.5})
    assert out.significant_differences == []


def test_context_tolerates_garbage():
    out = compare_contexts(None, {"Math": "high"})
    assert out.differences == {} and out.pattern == "balanced"


def _timeline():
    return [
        source({"Math": 2.0, "Literacy": 4.0}, timestamp="2024-03-01T00:00:00Z"),
        source({"Math": 1.0, "Literacy": 3.8}, timestamp="2024-01-01T00:00:00Z"),
    ]


def test_progress_sorts_by_timestamp():
    summary = build_progress(_timeline())
    assert summary.growth_indicators == {"Literacy": 0.2, "Math": 1.0}
    assert summary.consistent_strengths == ["Literacy"]
    assert summary.emerging_strengths == ["Math"]


def test_undated_entries_follow_dated_ones():
    entries = [source({"Math": 4.0}), source({"Math": 2.0}, timestamp="2024-01-01")]
    assert growth_indicators(entries) == {"Math": 2.0}


def test_offsets_are_compared_in_utc():
    entries = [
        source({"Math": 4.0}, timestamp="2024-01-01T06:00:00Z"),
        source({"Math": 2.0}, timestamp="2024-01-01T10:00:00+05:00"),
    ]
    assert growth_indicators(entries) == {"Math": 2.0}
    assert detect_milestones(entries).significant_growth_areas == ["Math"]


def test_milestones():
    ms = detect_milestones(_timeline())
    assert ms.significant_growth_areas == ["Math"]
    assert ms.strong_progress_indicators == ["Math"]
    assert ms.expected_growth_pattern


def test_single_entry_has_no_progress():
    summary = build_progress([source({"Math": 4.0})])
    assert summary.growth_indicators == {}
    assert not detect_milestones([source({"Math": 4.0})]).expected_growth_pattern


def test_next_recommendations_for_single_parent():
    recs = next_assessment_recommendations([parent(flat_scores(4.0))])
    assert any("teacher assessment" in r for r in recs)
    assert not any("parent assessment" in r for r in recs)
    assert any("Additional assessments" in r for r in recs)


def test_complete_profile_needs_nothing_more():
    srcs = [parent(flat_scores(4.0)), teacher(flat_scores(4.0))]
    assert next_assessment_recommendations(srcs) == []
    status = consolidation_status(srcs, 100.0)
    assert status["completeness_score"] == 90
    assert status["confidence_level"] == "high"
    assert status["missing_contexts"] == []
    assert status["recommendations"] == []


def test_contextual_recommendations_name_strength_and_growth():
    scores = flat_scores(3.5)
    scores.update({"Math": 4.6, "Literacy": 2.0})
    recs = contextual_recommendations(scores)
    assert set(recs) == {"home_activities", "classroom_strategies", "general_support"}
    assert "Math" in recs["home_activities"][0]
    assert "Literacy" in recs["classroom_strategies"][1]
