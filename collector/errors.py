from typing import Optional

from collector.models.enums import FailureReason


class CollectorError(RuntimeError):
    """Pipeline failure that ends up as a failure outcome.

    `reason` is the classification published as the outcome's `error`;
    `detail` is the diagnostic blob (raw body, base64 data, URL) published
    in its `url` field.
    """

    reason = FailureReason.INTERNAL

    def __init__(self, detail: str = "", cause: Optional[str] = None, reason: Optional[FailureReason] = None):
        if reason is not None:
            self.reason = reason
        super().__init__(cause or self.reason.value)
        self.detail = detail
        self.cause = cause


class DecodeError(CollectorError):
    reason = FailureReason.BAD_BASE64


class ParseError(CollectorError):
    reason = FailureReason.BAD_INPUT_JSON


class ValidationError(CollectorError):
    reason = FailureReason.INVALID_URL


class FetchError(CollectorError):
    reason = FailureReason.FETCH_FAILED

    def __init__(self, detail: str, cause: str, timed_out: bool = False):
        super().__init__(detail, cause)
        self.timed_out = timed_out


class SerializationError(CollectorError):
    reason = FailureReason.SERIALIZATION_FAILED


class PublishError(CollectorError):
    """Terminal: logged only, never turned into another publish."""
