from __future__ import annotations

from typing import Any, Dict, List

from .personality import strengths_and_growth
from .confidence import completeness_percentage, confidence_level, missing_contexts, source_counts
from .config import COMPLETENESS_TARGET


def next_assessment_recommendations(sources: Any) -> List[str]:
    """Suggest which perspectives to add next to a progressive profile."""
    counts = source_counts(sources)
    out: List[str] = []
    if not counts["parent"]:
        out.append("Consider adding a parent assessment for home behavior insights")
    if not counts["teacher"]:
        out.append("Consider adding a teacher assessment for classroom behavior insights")
    if counts["total"] == 1:
        out.append("Additional assessments will increase profile confidence and accuracy")
    if completeness_percentage(sources) < COMPLETENESS_TARGET:
        out.append("Complete assessment or add context-specific assessments for fuller profile")
    return out


def contextual_recommendations(scores: Any) -> Dict[str, List[str]]:
    sg = strengths_and_growth(scores)
    top = sg.strengths[0] if sg.strengths else None
    low = sg.growth_areas[0] if sg.growth_areas else None
    return {
        "home_activities": [
            f"Leverage {top or 'their interests'} through engaging home activities",
            f"Support {low or 'development'} with low-pressure home practice",
            "Create consistent learning routines that match their learning style",
        ],
        "classroom_strategies": [
            f"Utilize {top or 'their strengths'} in group activities and projects",
            f"Provide scaffolding for {low or 'growing skills'} in classroom settings",
            "Consider seating and grouping that supports their learning profile",
        ],
        "general_support": [
            "Celebrate progress and effort over perfection",
            "Provide multiple ways to demonstrate understanding",
            "Maintain open communication between home and school",
        ],
    }


def consolidation_status(sources: Any, confidence_value: float) -> Dict[str, Any]:
    """Summarize how complete a profile is and what would strengthen it."""
    counts = source_counts(sources)
    completeness = completeness_percentage(sources)
    level = confidence_level(confidence_value)
    missing = missing_contexts(sources)
    recs: List[str] = []
    if level == "low":
        recs.append("Add more assessment perspectives to increase profile confidence")
    if "parent_home" in missing:
        recs.append("Parent assessment would add valuable home behavior insights")
    if "teacher_classroom" in missing:
        recs.append("Teacher assessment would add professional classroom observations")
    if completeness < 70:
        recs.append("Profile is still developing - additional assessments recommended")
    return {
        "completeness_score": completeness,
        "confidence_level": level,
        "data_sources": [
            {"type": "parent", "count": counts["parent"]},
            {"type": "teacher", "count": counts["teacher"]},
        ],
        "missing_contexts": missing,
        "recommendations": recs,
    }
