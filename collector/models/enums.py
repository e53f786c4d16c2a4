from enum import Enum


class FailureReason(str, Enum):
    INVALID_METHOD = "Invalid request method"
    UNREADABLE_BODY = "Cannot read body"
    BAD_ENVELOPE = "Error unmarshalling JSON"
    BAD_BASE64 = "Error decoding data"
    BAD_INPUT_JSON = "Error unmarshalling input JSON"
    INVALID_URL = "Invalid URL"
    FETCH_FAILED = "Error fetching URL"
    SERIALIZATION_FAILED = "Error marshalling output JSON"
    INTERNAL = "Internal error"


class BodyKind(str, Enum):
    JSON = "json"
    TEXT = "text"


class PublishMode(str, Enum):
    PUBSUB = "pubsub"
    REDIS = "redis"
    LOG = "log"
