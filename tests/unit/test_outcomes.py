import json

import pytest
from pydantic import ValidationError

from collector.schemas.outcomes import FetchFailure, FetchSuccess, dump_outcome, format_rfc3339_nano


def success(**overrides):
    fields = dict(url="https://example.com", headers="{}", response_body="hi",
                  response_time=12, request_time="2024-01-01T00:00:00Z", status_code=200)
    fields.update(overrides)
    return FetchSuccess(**fields)


def test_success_serializes_camel_case_without_absent_body():
    payload = json.loads(dump_outcome(success()))
    assert payload == {
        "url": "https://example.com",
        "headers": "{}",
        "responseBody": "hi",
        "responseTime": 12,
        "requestTime": "2024-01-01T00:00:00Z",
        "statusCode": 200,
    }


def test_empty_text_body_is_still_emitted():
    payload = json.loads(dump_outcome(success(response_body="")))
    assert payload["responseBody"] == ""
    assert "responseJson" not in payload


def test_success_requires_exactly_one_body():
    with pytest.raises(ValidationError):
        success(response_json="{}")
    with pytest.raises(ValidationError):
        success(response_body=None)


def test_failure_has_no_success_fields():
    payload = json.loads(dump_outcome(FetchFailure(url="bad", error="Invalid URL")))
    assert set(payload) == {"url", "error", "requestTime"}
    assert payload["requestTime"].endswith("Z")


@pytest.mark.parametrize("ns, expected", [
    (0, "1970-01-01T00:00:00Z"),
    (1_700_000_000_123_456_789, "2023-11-14T22:13:20.123456789Z"),
    (1_700_000_000_500_000_000, "2023-11-14T22:13:20.5Z"),
])
def test_format_rfc3339_nano(ns, expected):
    assert format_rfc3339_nano(ns) == expected
