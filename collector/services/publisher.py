from typing import Optional

import redis
from google.cloud import pubsub_v1

from collector.config import BACKEND_REDIS, Settings
from collector.errors import PublishError
from collector.logger import setup_logger
from collector.models.enums import PublishMode
from collector.schemas.outcomes import FetchOutcome, dump_outcome

logger = setup_logger(__name__)

MESSAGE_ATTRIBUTES = {"type": "request"}


class PubSubTransport:
    def __init__(self, project_id: str, topic: str):
        self.client = pubsub_v1.PublisherClient()
        self.topic_path = self.client.topic_path(project_id, topic)

    def send(self, data: str) -> str:
        future = self.client.publish(self.topic_path, data.encode("utf-8"), **MESSAGE_ATTRIBUTES)
        return future.result()


class RedisTransport:
    def __init__(self, redis_url: str, channel: str):
        self.client = redis.from_url(redis_url, decode_responses=True)
        self.channel = channel

    def send(self, data: str) -> str:
        receivers = self.client.publish(self.channel, data)
        return f"{self.channel}:{receivers}"


class OutcomePublisher:
    """Delivers serialized outcomes to the outbound topic, or to the log."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._transport = None

    @property
    def mode(self) -> PublishMode:
        if not self.settings.response_topic:
            return PublishMode.LOG
        if self.settings.publish_backend == BACKEND_REDIS:
            return PublishMode.REDIS
        if not self.settings.project_id:
            return PublishMode.LOG
        return PublishMode.PUBSUB

    def _build_transport(self):
        if self.mode == PublishMode.REDIS:
            return RedisTransport(self.settings.redis_url, self.settings.response_topic)
        return PubSubTransport(self.settings.project_id, self.settings.response_topic)

    def _get_transport(self):
        if self._transport is None:
            self._transport = self._build_transport()
        return self._transport

    def publish(self, outcome: FetchOutcome) -> Optional[str]:
        message = dump_outcome(outcome)

        if not self.settings.response_topic:
            logger.info("Publish Message: %s", message)
            return None

        if self.mode == PublishMode.LOG:
            logger.warning("GOOGLE_CLOUD_PROJECT not set, cannot publish to PubSub")
            logger.info("Publish Message: %s", message)
            return None

        try:
            transport = self._get_transport()
        except Exception as e:
            logger.error("Error creating %s client: %s", self.mode.value, e)
            logger.info("Publish Message: %s", message)
            return None

        try:
            message_id = self.send(transport, message)
        except PublishError as e:
            logger.error("Error publishing message to %s: %s | message=%s", self.settings.response_topic, e.cause, e.detail)
            return None

        logger.info("Published message with ID: %s", message_id)
        return message_id

    def send(self, transport, message: str) -> str:
        try:
            return transport.send(message)
        except Exception as e:
            raise PublishError(message, str(e))
