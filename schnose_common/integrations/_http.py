from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from schnose_common.errors import UpstreamApiError
from schnose_common.utils.env import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

USER_AGENT = "schnose-common (+https://github.com/Schnose)"


def request_json(
    session: requests.Session,
    url: str,
    *,
    service: str,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    GET `url` and decode the JSON body.

    A single attempt is made. Transport errors, non-200 responses and non-JSON
    bodies all surface as `UpstreamApiError`.
    """

    headers = {
        "accept": "application/json",
        "user-agent": USER_AGENT,
    }
    logger.debug("%s request: GET %s params=%s", service, url, dict(params or {}))

    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        logger.warning("%s request to %s failed: %s", service, url, exc)
        raise UpstreamApiError(f"{service} request failed: {exc}", error=exc) from exc

    if resp.status_code != 200:
        logger.warning("%s request to %s returned HTTP %s", service, url, resp.status_code)
        raise UpstreamApiError(
            f"{service} request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        return resp.json()
    except ValueError as exc:
        raise UpstreamApiError(
            f"{service} returned non-JSON response.",
            error=exc,
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc


def expect_object_list(payload: Any, *, service: str, what: str) -> list[Mapping[str, Any]]:
    """Check that `payload` is a list of JSON objects; the first stray item fails the whole response."""

    if not isinstance(payload, list):
        raise UpstreamApiError(f"{service} returned unexpected JSON shape for {what} (not a list).")
    for index, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise UpstreamApiError(
                f"{service} returned unexpected JSON shape for {what} "
                f"(item {index} is {type(item).__name__}, not an object)."
            )
    return payload
