"""Utility helpers for persisting learning profiles.

Profiles (with their full assessment history) are stored as one JSON file
each, plus a small index used for lookups by child name.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)

DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
PROFILES_DIR = DATA_ROOT / "profiles"
PROFILE_INDEX_PATH = DATA_ROOT / "profiles_index.json"

_LOCK = threading.Lock()


def _ensure_dirs() -> None:
    PROFILES_DIR.mkdir(parents=True, exist_ok=True)


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("unreadable json at %s: %s", path, exc)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(path)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def save_profile(profile_id: str, profile: Dict[str, Any], metadata: Dict[str, Any]) -> None:
    """Persist the profile JSON and its index metadata."""

    _ensure_dirs()
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(PROFILE_INDEX_PATH, {})
        if not isinstance(index, dict):
            index = {}
        index[profile_id] = metadata
        _write_json(PROFILE_INDEX_PATH, index)
        _write_json(PROFILES_DIR / f"{profile_id}.json", profile)


def load_profile(profile_id: str) -> Optional[Dict[str, Any]]:
    path = PROFILES_DIR / f"{Path(profile_id).name}.json"
    if not path.exists():
        return None
    data = _read_json(path, None)
    return data if isinstance(data, dict) else None


def delete_profile(profile_id: str) -> bool:
    removed = False
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(PROFILE_INDEX_PATH, {})
        if isinstance(index, dict) and profile_id in index:
            index.pop(profile_id, None)
            _write_json(PROFILE_INDEX_PATH, index)
            removed = True
        path = PROFILES_DIR / f"{Path(profile_id).name}.json"
        if path.exists():
            path.unlink()
            removed = True
    return removed


def list_profiles_for_child(child_name: str) -> List[Dict[str, Any]]:
    index: Dict[str, Dict[str, Any]] = _read_json(PROFILE_INDEX_PATH, {})
    if not isinstance(index, dict):
        return []
    key = child_name.strip().lower()
    out: List[Dict[str, Any]] = []
    for pid, meta in index.items():
        if not isinstance(meta, dict):
            log.warning("skipping malformed index entry %s", pid)
            continue
        if str(meta.get("childName", "")).strip().lower() == key:
            item = {"id": pid}
            item.update({k: v for k, v in meta.items() if k != "id"})
            out.append(item)
    out.sort(key=lambda r: str(r.get("updatedAt") or ""), reverse=True)
    return out
