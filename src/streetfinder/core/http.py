"""
HTTP helpers.

This module centralizes the minimal HTTP client logic used by the WFS client.

Design goals:
- Small surface area (GET an XML document).
- Deterministic defaults (timeout + User-Agent).
- Raise package errors so callers never need to know about httpx or ElementTree.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

import httpx

from streetfinder.core.errors import ParseError, TransportError


DEFAULT_USER_AGENT = "streetfinder/0.1.0 (+https://local)"


def get_xml(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_seconds: float = 15,
) -> ET.Element:
    """GET `url` and return the root element of the XML response body.

    Raises:
        TransportError: On transport errors or non-2xx status codes.
        ParseError: If the response body is not well-formed XML.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update(headers)

    try:
        with httpx.Client(timeout=timeout_seconds) as client:
            resp = client.get(url, params=params, headers=request_headers)
            resp.raise_for_status()
            content = resp.content
    except httpx.HTTPError as exc:
        raise TransportError(f"GET {url} failed: {exc}") from exc

    try:
        return ET.fromstring(content)
    except ET.ParseError as exc:
        raise ParseError(f"GET {url} returned malformed XML: {exc}") from exc
