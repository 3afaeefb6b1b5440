# SPDX-License-Identifier: Apache-2.0
"""HTTP backend utilities for JSON lookups.

Single-request helpers with retries on throttling and transient server
errors. Network failures propagate as ``requests`` exceptions; callers
decide whether a failed lookup is fatal.
"""

from __future__ import annotations

import json
import logging
import time

import requests

from treatyglobe.utils.cli_helpers import trace

RETRY_STATUS = {429, 500, 502, 503, 504}

LOGGER = logging.getLogger(__name__)


def _parse_retry_after(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def request_once(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    timeout: float = 60,
) -> tuple[int, dict[str, str], bytes]:
    trace(f"{method.upper()} {url}")
    resp = requests.request(
        method.upper(),
        url,
        headers=headers or {},
        params=params or {},
        timeout=timeout,
    )
    status = resp.status_code
    # Flatten headers to str->str
    headers_out: dict[str, str] = {k: v for k, v in resp.headers.items()}
    content = resp.content or b""
    return status, headers_out, content


def request_with_retries(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    timeout: float = 60,
    max_retries: int = 3,
    retry_backoff: float = 0.5,
) -> tuple[int, dict[str, str], bytes]:
    attempt = 0
    while True:
        status, resp_headers, content = request_once(
            method, url, headers=headers, params=params, timeout=timeout
        )
        if status not in RETRY_STATUS or attempt >= max_retries:
            return status, resp_headers, content
        delay = retry_backoff * (2**attempt)
        if "Retry-After" in resp_headers:
            delay = max(delay, _parse_retry_after(resp_headers["Retry-After"]))
        LOGGER.debug("HTTP %s from %s; retrying in %.2fs", status, url, delay)
        time.sleep(delay)
        attempt += 1


def json_loads(data: bytes) -> object:
    """Decode a UTF-8 JSON body, returning ``None`` when it is not valid JSON."""
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
