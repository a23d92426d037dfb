from __future__ import annotations

import json
from http.client import HTTPConnection, HTTPException, HTTPSConnection
from typing import Any
from urllib.parse import urlencode, urlparse

from ..errors import DecodeError, TransportError


def build_url(base_url: str, params: dict[str, Any] | None = None) -> str:
    trimmed = base_url.strip().rstrip("/")
    if trimmed and not urlparse(trimmed).scheme:
        trimmed = f"http://{trimmed}"
    if not params:
        return trimmed
    separator = "&" if "?" in trimmed else "?"
    return f"{trimmed}{separator}{urlencode(params)}"


def request_json(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout_s: float = 10.0,
) -> tuple[int, Any]:
    """Send a request and decode the JSON response body.

    Raises TransportError when the server cannot be reached and DecodeError
    when a non-empty body is not JSON. The status code is returned as-is.
    """
    parsed = urlparse(url)
    if not parsed.hostname:
        raise TransportError(f"missing hostname in {url!r}")
    if parsed.scheme == "https":
        conn = HTTPSConnection(parsed.hostname, parsed.port or 443, timeout=timeout_s)
    else:
        conn = HTTPConnection(parsed.hostname, parsed.port or 80, timeout=timeout_s)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    body_bytes = None
    if body is not None:
        body_bytes = json.dumps(body, ensure_ascii=False).encode("utf-8")
    request_headers = {"Accept": "application/json"}
    if body_bytes is not None:
        request_headers["Content-Type"] = "application/json"
        request_headers["Content-Length"] = str(len(body_bytes))
    if headers:
        request_headers.update(headers)
    try:
        conn.request(method, path, body=body_bytes, headers=request_headers)
        resp = conn.getresponse()
        status = int(resp.status)
        raw = resp.read()
    except (OSError, HTTPException) as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc
    finally:
        conn.close()
    if not raw:
        return status, None
    try:
        return status, json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        snippet = raw[:240].decode("utf-8", errors="replace").strip()
        raise DecodeError(f"non_json_response: {snippet}" if snippet else "non_json_response") from exc
