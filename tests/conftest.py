from __future__ import annotations

import pytest

from clp_core.question_bank import SKILLS
from clp_core.types import ScoredSource


def full_responses(value=5, *, preferences: bool = False) -> dict[str, object]:
    """Answer every core Likert question (1-24) with the same value."""

    responses: dict[str, object] = {str(qid): value for qid in range(1, 25)}
    if preferences:
        responses.update({
            "25": "hands-on",
            "26": "creative",
            "27": "small-group",
            "28": ["art", "stories"],
        })
    return responses


def flat_scores(value: float) -> dict[str, float]:
    return {skill: value for skill in SKILLS}


def source(
    scores: dict[str, object],
    weight: float = 1.0,
    *,
    quiz_type: str = "general",
    respondent_type: str = "general",
    timestamp: str | None = None,
) -> ScoredSource:
    return ScoredSource(
        scores=scores,
        weight=weight,
        quiz_type=quiz_type,
        respondent_type=respondent_type,
        timestamp=timestamp,
    )


def parent(scores: dict[str, object], weight: float = 0.6, **kw) -> ScoredSource:
    return source(scores, weight, quiz_type="parent_home", respondent_type="parent", **kw)


def teacher(scores: dict[str, object], weight: float = 0.8, **kw) -> ScoredSource:
    return source(scores, weight, quiz_type="teacher_classroom", respondent_type="teacher", **kw)


@pytest.fixture
def scenario_responses() -> dict[int, int]:
    return {1: 5, 2: 5, 3: 4, 13: 5, 14: 5, 15: 5, 22: 2, 23: 3, 24: 2}
