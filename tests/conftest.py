import base64
import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from collector.config import Settings
from collector.dependencies import get_publisher, get_settings
from collector.main import app


def make_envelope(payload=None, data=None) -> dict:
    if data is None:
        data = base64.b64encode(json.dumps(payload).encode()).decode()
    return {
        "message": {
            "data": data,
            "attributes": {"source": "test"},
            "messageId": "1234567890",
            "publishTime": "2024-01-01T00:00:00Z",
        },
        "subscription": "projects/test/subscriptions/collector-push",
    }


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def client(settings, publisher):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_publisher] = lambda: publisher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def published(publisher):
    """Outcomes handed to the publisher, in call order."""
    def _published():
        return [c.args[0] for c in publisher.publish.call_args_list]
    return _published


@pytest.fixture
def envelope():
    return make_envelope
