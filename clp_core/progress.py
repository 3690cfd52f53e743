from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Tuple
from datetime import datetime, timezone

from .types import ProgressSummary, Milestones
from .question_bank import SKILLS
from .scoring import numeric_skill_scores
from .consolidation import as_source
from .config import (
    CONSISTENT_STRENGTH_MIN,
    EMERGING_GROWTH_MIN,
    MILESTONE_SIGNIFICANT,
    MILESTONE_PROGRESS,
)


def _naive_utc(dt: datetime) -> datetime:
    # naive timestamps are taken as UTC already
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_ts(value: Any) -> Optional[datetime]:
    if isinstance(value, str) and value.strip():
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    try:
        return _naive_utc(value)
    except OverflowError:
        return None


def _timeline(entries: Any) -> List[Tuple[int, Optional[datetime], Dict[str, float]]]:
    if entries is None or isinstance(entries, (str, bytes, Mapping)):
        return []
    try:
        items = list(entries)
    except TypeError:
        return []
    rows = []
    for idx, obj in enumerate(items):
        src = as_source(obj)
        if src is None:
            continue
        rows.append((idx, _parse_ts(src.timestamp), numeric_skill_scores(src.scores)))
    # undated entries keep submission order, after dated ones
    rows.sort(key=lambda r: (r[1] is None, r[1] or datetime.min, r[0]))
    return rows


def growth_indicators(entries: Any) -> Dict[str, float]:
    """Last minus first observation per skill, for skills seen at least twice."""
    rows = _timeline(entries)
    out: Dict[str, float] = {}
    for skill in SKILLS:
        series = [vec[skill] for _, _, vec in rows if skill in vec]
        if len(series) > 1:
            out[skill] = round(series[-1] - series[0], 2)
    return out


def build_progress(entries: Any) -> ProgressSummary:
    rows = _timeline(entries)
    growth: Dict[str, float] = {}
    consistent: List[str] = []
    emerging: List[str] = []
    for skill in SKILLS:
        series = [vec[skill] for _, _, vec in rows if skill in vec]
        if len(series) < 2:
            continue
        delta = round(series[-1] - series[0], 2)
        growth[skill] = delta
        if all(v >= CONSISTENT_STRENGTH_MIN for v in series):
            consistent.append(skill)
        elif delta > EMERGING_GROWTH_MIN:
            emerging.append(skill)
    return ProgressSummary(growth_indicators=growth, consistent_strengths=consistent, emerging_strengths=emerging)


def detect_milestones(entries: Any) -> Milestones:
    """Compare the earliest and latest assessment for developmental jumps."""
    rows = _timeline(entries)
    if len(rows) < 2:
        return Milestones([], [], False)
    earlier, later = rows[0][2], rows[-1][2]
    significant, progress = [], []
    for skill, value in later.items():
        if skill not in earlier:
            continue
        delta = value - earlier[skill]
        if delta >= MILESTONE_SIGNIFICANT: significant.append(skill)
        if delta >= MILESTONE_PROGRESS: progress.append(skill)
    return Milestones(
        significant_growth_areas=significant,
        strong_progress_indicators=progress,
        expected_growth_pattern=bool(progress),
    )
