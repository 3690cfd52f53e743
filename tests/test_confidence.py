from __future__ import annotations

import math

from clp_core.confidence import (
    average_skill_difference,
    common_skills,
    completeness_percentage,
    confidence,
    confidence_level,
    confidence_report,
    detect_conflicts,
    missing_contexts,
    source_counts,
)
from clp_core.question_bank import SKILLS
from tests.conftest import flat_scores, parent, source, teacher


def test_empty_sources_baseline():
    assert confidence([]) == 30.0
    assert confidence(None) == 30.0


def test_adding_teacher_source_increases_confidence():
    alone = confidence([parent(flat_scores(4.0))])
    both = confidence([parent(flat_scores(4.0)), teacher(flat_scores(4.0))])
    assert alone == 60.0
    assert both > alone
    assert both == 100.0


def test_agreement_beats_disagreement():
    agree = confidence_report([source(flat_scores(4.0)), source(flat_scores(4.0))])
    clash = confidence_report([source(flat_scores(5.0)), source(flat_scores(1.0))])
    assert agree.agreement_bonus == 30.0
    assert agree.confidence == 95.0
    assert clash.agreement_bonus == 0.0
    assert clash.confidence == 65.0
    assert clash.conflicts.severity == "high"


def test_second_source_never_lowers_confidence():
    one_teacher = confidence([teacher(flat_scores(5.0))])
    two_teachers = confidence([teacher(flat_scores(5.0)), teacher(flat_scores(1.0))])
    assert one_teacher == 85.0
    assert two_teachers > one_teacher
    one_parent = confidence([parent(flat_scores(5.0))])
    two_parents = confidence([parent(flat_scores(5.0)), parent(flat_scores(1.0))])
    assert one_parent == 60.0
    assert two_parents > one_parent


def test_source_bonus_is_capped():
    many = [source(flat_scores(5.0)) if i % 2 else source(flat_scores(1.0)) for i in range(10)]
    report = confidence_report(many)
    assert report.source_bonus == 15.0
    assert confidence_report([source({}), source(flat_scores(3.0))]).source_bonus == 0.0


def test_completeness_scales_with_coverage():
    sparse = confidence([source({"Math": 4.0, "Literacy": 4.0})])
    full = confidence([source(flat_scores(4.0))])
    assert sparse == 37.5
    assert full - sparse > 20


def test_professional_bonus_from_either_tag():
    by_quiz = confidence_report([source({}, quiz_type="teacher_classroom")])
    by_role = confidence_report([source({}, respondent_type="teacher")])
    assert by_quiz.professional_bonus == by_role.professional_bonus == 25.0


def test_ignored_weight_source_does_not_count():
    alone = confidence_report([parent(flat_scores(5.0))])
    for bad in (0.0, -1.0, math.nan, None):
        report = confidence_report([parent(flat_scores(5.0)), teacher(flat_scores(1.0), bad)])
        assert report.confidence == alone.confidence
        assert report.professional_bonus == 0.0
        assert report.conflicts.severity == "none"
        assert not report.conflicts.requires_manual_review
    assert detect_conflicts([parent(flat_scores(5.0)), teacher(flat_scores(1.0), 0.0)]).severity == "none"
    assert common_skills([source({"Math": 4.0}), source({"Literacy": 2.0}, 0)]) == ["Math"]


def test_valid_weights_do_not_change_confidence():
    a = confidence([parent(flat_scores(4.0), 0.6), teacher(flat_scores(3.0), 0.8)])
    b = confidence([parent(flat_scores(4.0), 1e6), teacher(flat_scores(3.0), 1e-6)])
    assert a == b


def test_shared_skill_helpers():
    srcs = [source({"Math": 4.0, "Literacy": 3.0}), source({"Math": 2.0})]
    assert common_skills(srcs) == ["Math"]
    assert average_skill_difference(srcs) == 2.0
    assert average_skill_difference([source({"Math": 4.0}), source({"Literacy": 4.0})]) is None


def test_levels():
    assert confidence_level(80) == "high"
    assert confidence_level(79.9) == "medium"
    assert confidence_level(60) == "medium"
    assert confidence_level(59.9) == "low"


def test_conflicts_high_severity():
    home = flat_scores(3.0)
    home.update({"Communication": 5.0, "Math": 5.0, "Content": 4.0})
    school = flat_scores(3.0)
    school.update({"Communication": 1.5, "Math": 1.0, "Content": 3.5})
    report = detect_conflicts([parent(home), teacher(school)])
    assert report.requires_manual_review
    assert report.severity == "high"
    assert report.affected_skills == ["Communication", "Math"]
    assert report.recommended_action == "schedule_conference"
    assert report.max_differences["Content"] == 0.5


def test_conflicts_medium_and_low():
    medium = detect_conflicts([source({"Math": 5.0}), source({"Math": 2.0})])
    assert medium.severity == "medium"
    assert medium.recommended_action == "provide_context_recommendations"
    low = detect_conflicts([source({"Math": 4.0}), source({"Math": 3.0})])
    assert low.severity == "low" and not low.requires_manual_review


def test_conflicts_need_two_sources():
    report = detect_conflicts([source(flat_scores(5.0))])
    assert report.severity == "none"
    assert report.recommended_action == "none"
    assert not report.requires_manual_review


def test_report_is_always_in_range():
    weird = [source({"Math": math.inf}), source({s: -100.0 for s in SKILLS}), source(None), 7]
    value = confidence(weird)
    assert 0.0 <= value <= 100.0


def test_source_counts_and_completeness():
    srcs = [parent(flat_scores(4.0)), parent(flat_scores(4.0)), teacher(flat_scores(4.0))]
    assert source_counts(srcs) == {"parent": 2, "teacher": 1, "total": 3}
    assert completeness_percentage(srcs) == 95
    assert completeness_percentage([parent({})]) == 45
    assert missing_contexts([parent({})]) == ["teacher_classroom"]
