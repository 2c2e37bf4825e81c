"""
Small JSON-over-HTTP base client shared by the node and compiler APIs.

- Built on httpx; one `httpx.Client` per instance, closed with `close()` or
  by using the instance as a context manager.
- Non-2xx responses raise SdkError carrying the body's `reason` when present.
- No retries: a failed request is terminal for the invocation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from ..errors import SdkError
from ..version import user_agent

log = logging.getLogger(__name__)

JSON = Any


def _error_reason(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("reason", "message", "error"):
            if body.get(key):
                return str(body[key])
    text = r.text.strip()
    if text:
        return text[:256]
    return f"HTTP {r.status_code} {r.reason_phrase}".strip()


@dataclass
class JsonHttpApi:
    base_url: str
    timeout: float = 30.0
    headers: Optional[Mapping[str, str]] = None
    _client: Any = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        merged: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if self.headers:
            merged.update(dict(self.headers))
        self.base_url = self.base_url.rstrip("/")
        self._client = httpx.Client(timeout=self.timeout, headers=merged)

    # --- context manager -------------------------------------------------

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        self._client.close()

    # --- requests --------------------------------------------------------

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> JSON:
        return self._send("GET", path, params=params)

    def post(self, path: str, body: Any) -> JSON:
        return self._send("POST", path, body=body)

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> JSON:
        url = f"{self.base_url}{path}"
        log.debug("%s %s", method, url)
        try:
            if body is None:
                r = self._client.request(method, url, params=params)
            else:
                content = json.dumps(body, separators=(",", ":"), ensure_ascii=False)
                r = self._client.request(
                    method,
                    url,
                    params=params,
                    content=content,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            raise SdkError(f"Network error: {e}", endpoint=path) from e

        if r.status_code >= 400:
            raise SdkError(_error_reason(r), status=r.status_code, endpoint=path)
        try:
            return r.json()
        except ValueError as e:
            raise SdkError(
                f"Non-JSON response (HTTP {r.status_code}): {r.text[:256]}",
                status=r.status_code,
                endpoint=path,
            ) from e


__all__ = ["JsonHttpApi"]
