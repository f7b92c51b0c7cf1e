import json

import pytest

from dreamforge.generation.errors import MalformedResponseError, ValidationError
from dreamforge.generation.sanitizer import parse_and_sanitize, validate_structure


def test_pure_json_matches_direct_parse():
    """A clean payload is returned exactly as json.loads would return it."""
    raw = '{"title": "Neon Drift", "coreMechanics": ["a", "b"], "score": 1.5, "ok": true}'
    assert parse_and_sanitize(raw) == json.loads(raw)


def test_fenced_payload_is_recovered():
    raw = '```json\n{"editMode": "patch", "edits": []}\n```'
    assert parse_and_sanitize(raw) == {"editMode": "patch", "edits": []}


def test_leading_and_trailing_prose_is_ignored():
    raw = 'Sure! Here is the sheet:\n{"title": "X", "nested": {"a": 1}}\nLet me know if you need more.'
    assert parse_and_sanitize(raw) == {"title": "X", "nested": {"a": 1}}


def test_fence_cleanup_handles_payloads_without_braces():
    """Only the fence-stripping strategy can recover a bare array."""
    assert parse_and_sanitize("```JSON\n[1, 2, 3]\n```") == [1, 2, 3]


@pytest.mark.parametrize("raw", [
    "no json here at all",
    "{not: valid, json}",
    "} backwards {",
    "",
])
def test_unparseable_text_raises(raw):
    with pytest.raises(MalformedResponseError):
        parse_and_sanitize(raw)


def test_validate_structure_names_the_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_structure({"a": 1, "c": 3}, ["a", "b", "c"], "Ctx")
    assert exc_info.value.missing == ["b"]
    assert str(exc_info.value) == "Ctx: Missing required fields: b"


def test_validate_structure_lists_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_structure({}, ["html", "instructions"], "Prototype Builder")
    assert exc_info.value.missing == ["html", "instructions"]


def test_validate_structure_rejects_non_objects():
    with pytest.raises(ValidationError, match="not a valid object"):
        validate_structure([1, 2], ["a"], "Ctx")


def test_validate_structure_does_not_check_types():
    data = {"edits": "not-a-list"}
    assert validate_structure(data, ["edits"], "Ctx") is data
