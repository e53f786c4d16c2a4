import json

from pydantic_core import PydanticSerializationError

from collector.errors import CollectorError, SerializationError
from collector.logger import setup_logger
from collector.models.enums import BodyKind, FailureReason
from collector.schemas.outcomes import FetchFailure, FetchOutcome, FetchSuccess, RawResponse, dump_outcome
from collector.services.classifier import classify_body
from collector.services.decoder import decode_request, parse_envelope
from collector.services.fetcher import HTTPFetcher
from collector.services.publisher import OutcomePublisher

logger = setup_logger(__name__)


def build_success(raw: RawResponse) -> FetchSuccess:
    kind, text = classify_body(raw.body)
    return FetchSuccess(
        url=raw.url,
        headers=json.dumps(raw.headers, sort_keys=True, separators=(",", ":"), ensure_ascii=False),
        response_json=text if kind == BodyKind.JSON else None,
        response_body=text if kind == BodyKind.TEXT else None,
        response_time=raw.response_time_ms,
        request_time=raw.request_time,
        status_code=raw.status_code,
    )


class CollectorService:
    def __init__(self, fetcher: HTTPFetcher, publisher: OutcomePublisher):
        self.fetcher = fetcher
        self.publisher = publisher

    def run(self, body: bytes) -> FetchOutcome:
        envelope = parse_envelope(body)
        logger.info("Push message received | message_id=%s | subscription=%s",
                    envelope.message.message_id, envelope.subscription)
        req = decode_request(envelope)
        raw = self.fetcher.fetch(req.url)
        outcome = build_success(raw)
        try:
            logger.info("Processed Response: %s", dump_outcome(outcome))
        except PydanticSerializationError as e:
            raise SerializationError(req.url, str(e))
        return outcome

    def handle(self, body: bytes) -> FetchOutcome:
        """Run one push delivery end to end. Never raises."""
        try:
            outcome = self.run(body)
        except CollectorError as e:
            outcome = self.fail(e.reason, e.detail, e.cause)
        except Exception:
            logger.exception("Unexpected error while handling push message")
            outcome = FetchFailure(error=FailureReason.INTERNAL.value)

        self.publisher.publish(outcome)
        return outcome

    def fail(self, reason: FailureReason, detail: str = "", cause: str = None) -> FetchFailure:
        logger.error("%s: %s | detail=%s", reason.value, cause or reason.value, detail)
        return FetchFailure(url=detail, error=reason.value)

    def reject(self, reason: FailureReason, detail: str = "") -> FetchOutcome:
        """Failure raised outside the pipeline (bad method, unreadable body)."""
        outcome = self.fail(reason, detail)
        self.publisher.publish(outcome)
        return outcome
