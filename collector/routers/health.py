from fastapi import APIRouter, Depends

from collector.dependencies import get_publisher
from collector.services.publisher import OutcomePublisher

router = APIRouter()


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/health/publisher")
def health_publisher(publisher: OutcomePublisher = Depends(get_publisher)):
    return {
        "ok": True,
        "backend": publisher.settings.publish_backend,
        "topic": publisher.settings.response_topic,
        "mode": publisher.mode.value,
    }
