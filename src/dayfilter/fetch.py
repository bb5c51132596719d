"""
Typed JSON fetching.

fetch_json() performs one blocking GET, reads the whole body and decodes it
into the requested shape with a pydantic TypeAdapter. The HTTP status is
returned as-is and never interpreted; a 500 with a valid JSON body decodes
like a 200.
"""

import time
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError, TransportError
from .logging_config import get_logger, log_api_call

logger = get_logger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=64)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def fetch_json(
    url: str,
    shape: Type[T] = Any,
    *,
    params: Optional[Dict[str, Any]] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    api_name: str = "HTTP"
) -> Tuple[int, T]:
    """
    GET a URL and decode its JSON body into `shape`.

    Args:
        url: Absolute URL to fetch
        shape: Target type (e.g. List[HolidayRecord], dict, a BaseModel)
        params: Query parameters, merged with any query already in `url`
        session: Optional requests session to issue the call with
        timeout: Seconds to wait for the server; None waits indefinitely
        api_name: Label used in the API call log line

    Returns:
        Tuple of (status_code, decoded value)

    Raises:
        TransportError: The request could not be completed
        DecodeError: The body is not valid JSON for `shape`; carries the
                     status code, the URL and the raw body
    """
    http = session if session is not None else requests
    start = time.time()

    try:
        response = http.get(url, params=params, timeout=timeout)
        body = response.content
    except requests.exceptions.RequestException as e:
        log_api_call(logger, api_name, url, False, (time.time() - start) * 1000, e)
        raise TransportError(f"GET {url} (params={params}) failed: {e}", url) from e

    duration_ms = (time.time() - start) * 1000
    status_code = response.status_code
    # Report the URL that was actually requested, query included
    requested_url = response.url if params else url

    try:
        result = _adapter(shape).validate_json(body)
    except (ValidationError, UnicodeDecodeError) as e:
        log_api_call(logger, api_name, requested_url, False, duration_ms, e)
        raw = body.decode("utf-8", errors="replace")
        raise DecodeError(requested_url, raw, status_code=status_code, reason=str(e)) from e

    log_api_call(logger, api_name, requested_url, True, duration_ms)
    return status_code, result


class TypedFetcher:
    """
    fetch_json() bound to an optional session and a default timeout.

    Without a session every call goes through requests.get() and nothing is
    left open. A caller-supplied session is closed by close() or on leaving a
    `with` block.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_name: str = "HTTP"
    ):
        self.session = session
        self.timeout = timeout
        self.api_name = api_name

    def get(
        self,
        url: str,
        shape: Type[T] = Any,
        params: Optional[Dict[str, Any]] = None
    ) -> Tuple[int, T]:
        """Fetch `url` and decode it into `shape`. See fetch_json()."""
        return fetch_json(
            url,
            shape,
            params=params,
            session=self.session,
            timeout=self.timeout,
            api_name=self.api_name,
        )

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def __enter__(self) -> "TypedFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
