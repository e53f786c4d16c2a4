import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Fetch limits
FETCH_TIMEOUT_S = 10.0
MAX_BODY_BYTES = 10 * 1024 * 1024  # 10 MiB
USER_AGENT = "http-response-collector"

PUSH_PATH = "/pubsub/push"
DEFAULT_PORT = 8080

# Publishing backends
BACKEND_PUBSUB = "pubsub"
BACKEND_REDIS = "redis"
BACKENDS = (BACKEND_PUBSUB, BACKEND_REDIS)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: Optional[str] = None
    response_topic: Optional[str] = None
    publish_backend: str = BACKEND_PUBSUB
    redis_url: str = "redis://localhost:6379/0"

    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    fetch_timeout_s: float = FETCH_TIMEOUT_S
    max_body_bytes: int = MAX_BODY_BYTES
    user_agent: str = USER_AGENT


def load_settings() -> Settings:
    """Build the process configuration once, from the environment and `.env`."""
    load_dotenv()

    backend = os.getenv("PUBLISH_BACKEND", BACKEND_PUBSUB).strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown PUBLISH_BACKEND {backend!r}, expected one of {BACKENDS}")

    return Settings(
        project_id=os.getenv("GOOGLE_CLOUD_PROJECT") or None,
        response_topic=os.getenv("RESPONSE_PUBSUB") or None,
        publish_backend=backend,
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
