import time
from datetime import datetime, timezone
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def format_rfc3339_nano(ns: int) -> str:
    """UTC RFC3339 timestamp with nanoseconds, trailing zeros trimmed."""
    seconds, frac = divmod(ns, 1_000_000_000)
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    if frac:
        stamp += "." + f"{frac:09d}".rstrip("0")
    return stamp + "Z"


def utc_now_rfc3339() -> str:
    return format_rfc3339_nano(time.time_ns())


class RawResponse(BaseModel):
    """Unclassified capture of one GET."""
    url: str
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    truncated: bool = False
    response_time_ms: int
    request_time: str


class FetchSuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    headers: str = "{}"
    response_json: Optional[str] = Field(default=None, alias="responseJson")
    response_body: Optional[str] = Field(default=None, alias="responseBody")
    response_time: int = Field(alias="responseTime")
    request_time: str = Field(alias="requestTime")
    status_code: int = Field(alias="statusCode")

    @model_validator(mode="after")
    def _one_body(self):
        if (self.response_json is None) == (self.response_body is None):
            raise ValueError("exactly one of response_json/response_body must be set")
        return self


class FetchFailure(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    error: str
    request_time: str = Field(default_factory=utc_now_rfc3339, alias="requestTime")


FetchOutcome = Union[FetchSuccess, FetchFailure]


def dump_outcome(outcome: FetchOutcome) -> str:
    return outcome.model_dump_json(by_alias=True, exclude_none=True)
