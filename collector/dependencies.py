from functools import lru_cache

from fastapi import Depends

from collector.config import Settings, load_settings
from collector.services.collector_service import CollectorService
from collector.services.fetcher import HTTPFetcher
from collector.services.publisher import OutcomePublisher


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def _publisher(settings: Settings) -> OutcomePublisher:
    return OutcomePublisher(settings)


def get_publisher(settings: Settings = Depends(get_settings)) -> OutcomePublisher:
    return _publisher(settings)


def get_fetcher(settings: Settings = Depends(get_settings)):
    with HTTPFetcher.from_settings(settings) as fetcher:
        yield fetcher


def get_collector_service(fetcher: HTTPFetcher = Depends(get_fetcher),
                          publisher: OutcomePublisher = Depends(get_publisher)) -> CollectorService:
    return CollectorService(fetcher, publisher)
