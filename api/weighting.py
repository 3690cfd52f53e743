"""Caller-side weighting policy for progressive profiles.

The consolidation engine is a plain weighted average; how much each
assessment counts (respondent type, repeats of the same quiz type) is decided
here before sources are handed over.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from clp_core.types import ScoredSource
from clp_core import config as cfg_defaults


def _table(cfg: Optional[Mapping[str, Any]], name: str, default: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(cfg, Mapping) and isinstance(cfg.get(name), Mapping):
        return dict(cfg[name])
    return dict(default)


def quiz_weight(quiz_type: str, cfg: Optional[Mapping[str, Any]] = None) -> float:
    weights = _table(cfg, "QUIZ_WEIGHTS", cfg_defaults.QUIZ_WEIGHTS)
    try:
        return float(weights.get(quiz_type, cfg_defaults.DEFAULT_QUIZ_WEIGHT))
    except (TypeError, ValueError):
        return cfg_defaults.DEFAULT_QUIZ_WEIGHT


def confidence_boost(quiz_type: str, cfg: Optional[Mapping[str, Any]] = None) -> int:
    boosts = _table(cfg, "CONFIDENCE_BOOSTS", cfg_defaults.CONFIDENCE_BOOSTS)
    try:
        return int(boosts.get(quiz_type, cfg_defaults.DEFAULT_CONFIDENCE_BOOST))
    except (TypeError, ValueError):
        return cfg_defaults.DEFAULT_CONFIDENCE_BOOST


def _factor(cfg: Optional[Mapping[str, Any]]) -> float:
    raw = cfg.get("DIMINISHING_FACTOR") if isinstance(cfg, Mapping) else None
    try:
        val = float(raw) if raw is not None else cfg_defaults.DIMINISHING_FACTOR
    except (TypeError, ValueError):
        val = cfg_defaults.DIMINISHING_FACTOR
    return max(0.0, min(1.0, val))


def contribution_weight(
    quiz_type: str,
    prior_quiz_types: Iterable[str] = (),
    cfg: Optional[Mapping[str, Any]] = None,
) -> float:
    """Base quiz weight scaled down for each earlier assessment of the same type."""
    repeats = sum(1 for qt in prior_quiz_types if qt == quiz_type)
    return round(quiz_weight(quiz_type, cfg) * (_factor(cfg) ** repeats), 4)


def weighted_sources(
    assessments: Iterable[Mapping[str, Any]],
    cfg: Optional[Mapping[str, Any]] = None,
) -> List[ScoredSource]:
    """Turn stored assessments (oldest first) into scored sources with repeat-adjusted weights."""
    seen: List[str] = []
    out: List[ScoredSource] = []
    for a in assessments:
        if not isinstance(a, Mapping):
            continue
        qt = str(a.get("quiz_type") or "general")
        out.append(
            ScoredSource(
                scores=a.get("scores") if isinstance(a.get("scores"), Mapping) else {},
                weight=contribution_weight(qt, seen, cfg),
                quiz_type=qt,
                respondent_type=str(a.get("respondent_type") or "general"),
                timestamp=a.get("created_at"),
            )
        )
        seen.append(qt)
    return out
