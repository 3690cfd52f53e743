from __future__ import annotations

from clp_core.audit_export import to_csv, to_json
from clp_core.consolidation import consolidation_trace
from clp_core.question_bank import SKILLS
from tests.conftest import flat_scores, parent, teacher


def _events():
    return consolidation_trace([parent(flat_scores(4.0)), teacher({"Math": 2.0})])


def test_json_events_have_fixed_fields():
    body = to_json(_events())
    events = body["events"]
    assert len(events) == len(SKILLS) * 2
    assert set(events[0]) == {
        "skill", "source", "quiz_type", "respondent_type", "score", "weight", "included", "share",
    }
    missing = [e for e in events if e["source"] == 1 and e["skill"] == "Literacy"][0]
    assert missing["score"] is None
    assert missing["included"] is False


def test_csv_header_and_rows():
    text = to_csv(_events())
    lines = [line for line in text.strip().splitlines() if line]
    assert len(lines) == len(SKILLS) * 2 + 1
    header = lines[0].split(",")
    assert header[0] == "skill"
    assert header[-1] == "share"


def test_normalizes_junk_events():
    body = to_json([{"source": "x", "weight": "heavy", "score": "n/a"}, None])
    first = body["events"][0]
    assert first["source"] == 0
    assert first["weight"] == 0.0
    assert first["score"] is None
    assert first["skill"] == ""
