import pytest

from collector.models.enums import BodyKind
from collector.services.classifier import classify_body


@pytest.mark.parametrize("body", [b'{"message":"Hello"}', b"[1,2]", b"42", b'"str"', b"null", b' {"a": 1} \n'])
def test_json_values_keep_original_text(body):
    kind, text = classify_body(body)
    assert kind == BodyKind.JSON
    assert text == body.decode()


@pytest.mark.parametrize("body", [b"Body Content Goes Here", b"", b"NaN", b'{"a": Infinity}', b"{'a': 1}"])
def test_non_json_is_text(body):
    kind, text = classify_body(body)
    assert kind == BodyKind.TEXT
    assert text == body.decode()


def test_invalid_utf8_is_text():
    kind, text = classify_body(b"caf\xe9")
    assert kind == BodyKind.TEXT
    assert text.startswith("caf")


def test_deeply_nested_body_is_text():
    body = b"[" * 100000
    kind, text = classify_body(body)
    assert kind == BodyKind.TEXT
    assert text == body.decode()
