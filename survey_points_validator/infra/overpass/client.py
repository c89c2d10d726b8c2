"""
Overpass API client.

Posts a query to an Overpass interpreter endpoint and returns the raw
response body.  A single attempt is made; failures are reported as
``FetchError`` with the underlying ``requests`` exception chained.
"""

from __future__ import annotations

import logging

import requests

from ...config.env import DEFAULT_OVERPASS_URL
from ...errors import FetchError


def fetch_survey_points(query: str, url: str = DEFAULT_OVERPASS_URL, timeout: float = 60.0) -> str:
    """Run ``query`` against the Overpass interpreter.

    Args:
        query: Overpass QL text, sent as the request body.
        url: Interpreter endpoint.
        timeout: Seconds to wait for the HTTP response.

    Returns:
        The response body as text (CSV for the survey point query).

    Raises:
        FetchError: If the request fails or the status is not a success.
    """
    logging.info("[overpass] Requesting survey points", extra={"url": url})
    try:
        response = requests.post(
            url,
            data=query.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as err:
        logging.error("[overpass] Download failed", extra={"url": url})
        raise FetchError(f"Overpass request to {url} failed: {err}") from err
    body = response.text
    logging.info("[overpass] Survey points downloaded", extra={"bytes": len(body)})
    return body
