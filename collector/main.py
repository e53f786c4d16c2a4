import uvicorn
from fastapi import FastAPI

from collector.dependencies import get_settings
from collector.logger import set_level, setup_logger
from collector.routers import health, push

logger = setup_logger(__name__)

app = FastAPI(title="HTTP Response Collector")

app.include_router(push.router)
app.include_router(health.router)


def run():
    settings = get_settings()
    set_level(settings.log_level)
    logger.info("Starting server on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
