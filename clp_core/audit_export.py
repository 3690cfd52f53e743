"""JSON/CSV rendering of consolidation contribution traces."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional
import csv
import io


def _as_int(val: Any) -> int:
    try:
        return int(val)
    except (TypeError, ValueError):
        return 0


def _as_float(val: Any) -> float:
    try:
        return float(val)
    except (TypeError, ValueError):
        return 0.0


def _as_score(val: Any) -> Optional[float]:
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _as_text(val: Any) -> str:
    return "" if val is None else str(val)


# column order is the CSV header
_COLUMNS: Dict[str, Callable[[Any], Any]] = {
    "skill": _as_text,
    "source": _as_int,
    "quiz_type": _as_text,
    "respondent_type": _as_text,
    "score": _as_score,
    "weight": _as_float,
    "included": bool,
    "share": _as_float,
}


def _row(event: Any) -> Dict[str, Any]:
    event = event if isinstance(event, dict) else {}
    return {name: coerce(event.get(name)) for name, coerce in _COLUMNS.items()}


def to_json(events: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    rows: List[Dict[str, Any]] = [_row(evt) for evt in events]
    return {"events": rows}


def to_csv(events: Iterable[Dict[str, Any]]) -> str:
    """Render trace rows with a fixed header; a missing score is an empty cell."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(_COLUMNS))
    writer.writeheader()
    for evt in events:
        row = _row(evt)
        if row["score"] is None:
            row["score"] = ""
        writer.writerow(row)
    return out.getvalue()


__all__ = ["to_json", "to_csv"]
