from fastapi import APIRouter, Depends, Request, Response
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect
from starlette.routing import Match

from collector.config import PUSH_PATH
from collector.dependencies import get_collector_service
from collector.logger import setup_logger
from collector.models.enums import FailureReason
from collector.services.collector_service import CollectorService

logger = setup_logger(__name__)

router = APIRouter()


class AnyMethodRoute(APIRoute):
    """Matches its path for every HTTP method, custom ones included."""

    def matches(self, scope):
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope, receive, send):
        await self.app(scope, receive, send)


def ack() -> Response:
    # 200 for every outcome so Pub/Sub never redelivers
    return Response(status_code=200)


@router.post(PUSH_PATH)
async def push(request: Request, service: CollectorService = Depends(get_collector_service)) -> Response:
    try:
        body = await request.body()
    except ClientDisconnect as e:
        logger.error("Error reading request body: %s", e)
        await run_in_threadpool(service.reject, FailureReason.UNREADABLE_BODY)
        return ack()

    await run_in_threadpool(service.handle, body)
    return ack()


async def push_invalid_method(request: Request,
                              service: CollectorService = Depends(get_collector_service)) -> Response:
    logger.warning("Invalid request method: %s", request.method)
    await run_in_threadpool(service.reject, FailureReason.INVALID_METHOD)
    return ack()


# Registered after the POST route, so it only sees the other methods.
router.add_api_route(PUSH_PATH, push_invalid_method, methods=["GET"], include_in_schema=False,
                     route_class_override=AnyMethodRoute)
