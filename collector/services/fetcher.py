import time
from typing import Dict

import requests

from collector.config import FETCH_TIMEOUT_S, MAX_BODY_BYTES, USER_AGENT, Settings
from collector.errors import FetchError
from collector.logger import setup_logger
from collector.schemas.outcomes import RawResponse, format_rfc3339_nano

logger = setup_logger(__name__)

CHUNK_SIZE = 64 * 1024


def flatten_headers(resp: requests.Response) -> Dict[str, str]:
    """One string per header name, repeated values joined with ", "."""
    raw = getattr(resp.raw, "headers", None)
    if raw is None or not hasattr(raw, "getlist"):
        return dict(resp.headers)

    out: Dict[str, str] = {}
    for name in raw.keys():
        out[name] = ", ".join(raw.getlist(name))
    return out


class HTTPFetcher:
    def __init__(self, timeout_s: float = FETCH_TIMEOUT_S, max_body_bytes: int = MAX_BODY_BYTES,
                 user_agent: str = USER_AGENT, session: requests.Session = None):
        self.timeout_s = timeout_s
        self.max_body_bytes = max_body_bytes
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    @classmethod
    def from_settings(cls, settings: Settings) -> "HTTPFetcher":
        return cls(settings.fetch_timeout_s, settings.max_body_bytes, settings.user_agent)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _read_body(self, resp: requests.Response, url: str, deadline: float):
        buf = bytearray()
        truncated = False
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise FetchError(url, f"body read exceeded {self.timeout_s}s", timed_out=True)
                room = self.max_body_bytes - len(buf)
                if len(chunk) > room:
                    buf += chunk[:room]
                    truncated = True
                    break
                buf += chunk
        except requests.RequestException as e:
            raise FetchError(url, str(e), timed_out=isinstance(e, requests.Timeout))
        return bytes(buf), truncated

    def fetch(self, url: str) -> RawResponse:
        request_ns = time.time_ns()
        t0 = time.monotonic()
        deadline = t0 + self.timeout_s

        try:
            resp = self.session.get(url, timeout=(self.timeout_s, self.timeout_s), stream=True)
        except requests.Timeout as e:
            raise FetchError(url, str(e), timed_out=True)
        except requests.RequestException as e:
            raise FetchError(url, str(e))

        with resp:
            headers_at = time.monotonic()
            response_ms = int((headers_at - t0) * 1000)
            if headers_at > deadline:
                raise FetchError(url, f"headers arrived after {self.timeout_s}s", timed_out=True)
            headers = flatten_headers(resp)
            body, truncated = self._read_body(resp, url, deadline)
            if time.monotonic() > deadline:
                raise FetchError(url, f"body read exceeded {self.timeout_s}s", timed_out=True)

        if truncated:
            logger.warning("Response body truncated | url=%s | limit=%s", url, self.max_body_bytes)

        return RawResponse(
            url=url,
            status_code=resp.status_code,
            headers=headers,
            body=body,
            truncated=truncated,
            response_time_ms=response_ms,
            request_time=format_rfc3339_nano(request_ns),
        )
