# shop_admin/api/client.py
"""
HTTP adapter for the shop backend.

Every request goes through ApiClient.request(), which:
  - prefixes the configured base URL,
  - attaches "Authorization: Bearer <token>" when the session holds one
    (login/register work without it),
  - returns an ApiResponse for 2xx replies,
  - raises ApiError for anything else, carrying the server's `message`
    when the body has one, else the caller's fallback text.

No retries, caching or queueing happen here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import requests

from ..config import API_BASE_URL, HTTP_TIMEOUT
from .session import SessionContext

_log = logging.getLogger(__name__)

GENERIC_FAILURE = "Request failed"
NETWORK_FAILURE = "Could not reach the server. Check your connection."


class ApiError(Exception):
    """Backend or transport failure the controller/UI can surface."""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class AuthExpiredError(ApiError):
    """
    The backend rejected the attached credential (HTTP 401).

    Raised on the worker thread; the session is ended on the GUI thread by
    whoever receives it.
    """


@dataclass
class ApiResponse:
    status: int
    data: Any = None
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)


def _server_message(resp: requests.Response) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        msg = body.get("message") or body.get("error")
        if msg:
            return str(msg)
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Optional[SessionContext] = None,
        *,
        http: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or SessionContext()
        self.http = http or requests.Session()
        self.timeout = timeout

    # ------------------------------ core ------------------------------

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        raw: bool = False,
        fallback: Optional[str] = None,
    ) -> ApiResponse:
        method = method.upper()
        headers = self._headers()
        authed = "Authorization" in headers
        try:
            resp = self.http.request(
                method,
                self.url(path),
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            _log.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(fallback or NETWORK_FAILURE) from exc

        _log.debug("%s %s -> %s", method, path, resp.status_code)

        if not 200 <= resp.status_code < 300:
            message = _server_message(resp) or fallback or GENERIC_FAILURE
            _log.warning("%s %s -> %s: %s", method, path, resp.status_code, message)
            if resp.status_code == 401 and authed:
                raise AuthExpiredError(message, status=401)
            raise ApiError(message, status=resp.status_code)

        if raw:
            return ApiResponse(resp.status_code, None, resp.content, dict(resp.headers))
        data: Any = None
        if resp.content:
            try:
                data = resp.json()
            except ValueError:
                _log.warning("%s %s returned a non-JSON body", method, path)
                data = None
        return ApiResponse(resp.status_code, data, resp.content, dict(resp.headers))

    # ---------------------------- shortcuts ----------------------------

    def get(self, path: str, *, params=None, fallback: Optional[str] = None) -> Any:
        return self.request("GET", path, params=params, fallback=fallback).data

    def post(self, path: str, json: Any = None, *, fallback: Optional[str] = None) -> Any:
        return self.request("POST", path, json=json, fallback=fallback).data

    def download(self, path: str, *, fallback: Optional[str] = None) -> bytes:
        return self.request("GET", path, raw=True, fallback=fallback).content
