from __future__ import annotations

import pytest

from api.weighting import confidence_boost, contribution_weight, quiz_weight, weighted_sources


@pytest.mark.parametrize(
    "quiz_type, weight",
    [("parent_home", 0.6), ("teacher_classroom", 0.8), ("student_self", 0.3), ("general", 1.0), ("other", 0.5)],
)
def test_base_weights(quiz_type, weight):
    assert quiz_weight(quiz_type) == weight


def test_confidence_boosts():
    assert confidence_boost("teacher_classroom") == 40
    assert confidence_boost("general") == 50
    assert confidence_boost("mystery") == 25


def test_repeats_halve_the_weight():
    assert contribution_weight("parent_home", []) == 0.6
    assert contribution_weight("parent_home", ["parent_home"]) == 0.3
    assert contribution_weight("parent_home", ["parent_home", "teacher_classroom", "parent_home"]) == 0.15


def test_factor_from_config_is_clamped():
    assert contribution_weight("parent_home", ["parent_home"], {"DIMINISHING_FACTOR": 2}) == 0.6
    assert contribution_weight("parent_home", ["parent_home"], {"DIMINISHING_FACTOR": "bad"}) == 0.3


def test_config_weight_table_overrides_defaults():
    cfg = {"QUIZ_WEIGHTS": {"parent_home": 0.9}}
    assert quiz_weight("parent_home", cfg) == 0.9
    assert quiz_weight("teacher_classroom", cfg) == 0.5


def test_weighted_sources_from_stored_assessments():
    stored = [
        {"quiz_type": "parent_home", "respondent_type": "parent", "scores": {"Math": 4.0}, "created_at": "t1"},
        {"quiz_type": "parent_home", "respondent_type": "parent", "scores": {"Math": 3.0}, "created_at": "t2"},
        "not an assessment",
        {"quiz_type": "teacher_classroom", "respondent_type": "teacher", "scores": None},
    ]
    sources = weighted_sources(stored)
    assert [s.weight for s in sources] == [0.6, 0.3, 0.8]
    assert [s.respondent_type for s in sources] == ["parent", "parent", "teacher"]
    assert sources[0].timestamp == "t1"
    assert sources[2].scores == {}
