import base64
import binascii

from pydantic import ValidationError as PydanticValidationError

from collector.errors import DecodeError, ParseError, ValidationError
from collector.models.enums import FailureReason
from collector.schemas.envelopes import FetchRequest, PushEnvelope

URL_PREFIXES = ("http://", "https://")


def parse_envelope(body: bytes) -> PushEnvelope:
    try:
        return PushEnvelope.model_validate_json(body)
    except PydanticValidationError as e:
        raise ParseError(body.decode("utf-8", errors="replace"), str(e), reason=FailureReason.BAD_ENVELOPE)


def decode_data(envelope: PushEnvelope) -> bytes:
    blob = envelope.message.data
    try:
        return base64.b64decode(blob, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(blob, str(e))


def parse_request(data: bytes) -> FetchRequest:
    try:
        return FetchRequest.model_validate_json(data)
    except PydanticValidationError as e:
        raise ParseError(data.decode("utf-8", errors="replace"), str(e))


def validate_url(url: str) -> str:
    # Prefix check only: no DNS lookup, no host/port validation.
    if not url.startswith(URL_PREFIXES):
        raise ValidationError(url)
    return url


def decode_request(envelope: PushEnvelope) -> FetchRequest:
    req = parse_request(decode_data(envelope))
    validate_url(req.url)
    return req
