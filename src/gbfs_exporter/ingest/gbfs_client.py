from __future__ import annotations

import logging
from http.client import HTTPException
from typing import BinaryIO
from urllib.error import HTTPError, URLError
from urllib.parse import urlsplit
from urllib.request import Request, urlopen

from ..errors import BodyReadError, NetworkError
from .models import FeedResponse

logger = logging.getLogger(__name__)

USER_AGENT = "gbfs-exporter/0.1.0"
ALLOWED_SCHEMES = ("http", "https")


def fetch_feed(url: str, timeout: float = 30) -> FeedResponse:
    """GET ``url`` and return its status and raw body.

    Transport failures raise ``NetworkError``. A non-2xx answer is not an
    error here: its body is returned so the caller can still try to decode it.
    Failing to read the body raises ``BodyReadError``.
    """
    scheme = urlsplit(url).scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise NetworkError(url, ValueError(f"unsupported URL scheme {scheme!r}"))

    try:
        request = Request(
            url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"}
        )
        response = urlopen(request, timeout=timeout)
    except HTTPError as exc:
        logger.warning("Feed %s answered with HTTP %s", url, exc.code)
        try:
            body = _read_body(url, exc)
        finally:
            exc.close()
        return FeedResponse(url=url, status_code=exc.code, body=body)
    except (URLError, OSError, ValueError, HTTPException) as exc:
        raise NetworkError(url, exc) from exc

    with response:
        body = _read_body(url, response)
        status_code = response.status
    return FeedResponse(url=url, status_code=status_code, body=body)


def _read_body(url: str, stream: BinaryIO) -> bytes:
    try:
        return stream.read()
    except (OSError, HTTPException) as exc:
        raise BodyReadError(url, exc) from exc
