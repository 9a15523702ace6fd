from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests
from django.conf import settings

from apps.common import get_logger
from .config import HttpConfig
from .exceptions import RemoteAPIError, RemoteUnavailableError

logger = get_logger(__name__).bind(component="remote", layer="client")


class ApiClient:
    """Minimal JSON client for the Laravel store backend.

    Default headers (language, bearer token, guest id) come from the session's
    ``HttpConfig``; non-2xx answers raise ``RemoteAPIError`` carrying the
    backend's ``message``.
    """

    def __init__(
        self,
        config: HttpConfig,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.timeout = (
            timeout
            if timeout is not None
            else float(getattr(settings, "REMOTE_API_TIMEOUT", 15))
        )
        self.logger = logger.bind(guest_id=config.guest_id)

    def build_url(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        base = self.config.base_url or getattr(settings, "API_BASE_URL", "")
        cleaned_base = base[:-1] if base.endswith("/") else base
        cleaned_path = path if path.startswith("/") else f"/{path}"
        url = f"{cleaned_base}{cleaned_path}"
        if not query:
            return url
        params = {k: "" if v is None else str(v) for k, v in query.items()}
        return f"{url}?{urlencode(params)}"

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = self.config.default_headers
        if not extra:
            return headers
        return {**headers, **extra}

    def get_json(
        self,
        path: str,
        *,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self._request("GET", path, query=query, headers=headers)

    def post_json(
        self,
        path: str,
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self._request("POST", path, body=body, query=query, headers=headers)

    def put_json(
        self,
        path: str,
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self._request("PUT", path, body=body, query=query, headers=headers)

    def delete_json(
        self,
        path: str,
        *,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self._request("DELETE", path, query=query, headers=headers)

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        url = self.build_url(path, query)
        self.logger.debug("Calling store backend", method=method, url=url)
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(headers),
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            self.logger.warning(
                "Store backend unreachable", method=method, url=url, error=str(exc)
            )
            raise RemoteUnavailableError(
                "Store backend is unavailable", cause=exc
            ) from exc
        return self._decode_or_raise(response, method=method, url=url)

    def _decode_or_raise(self, response: requests.Response, *, method: str, url: str) -> Any:
        body = (response.text or "").strip()
        status = response.status_code

        decoded: Any = None
        if body:
            try:
                decoded = json.loads(body)
            except ValueError:
                decoded = body

        if 200 <= status < 300:
            return decoded

        # Laravel: {"message": "...", "errors": {"field": ["..."]}}
        message = None
        errors = None
        if isinstance(decoded, dict):
            candidate = decoded.get("message")
            if isinstance(candidate, str) and candidate:
                message = candidate
            if isinstance(decoded.get("errors"), dict):
                errors = decoded["errors"]
        elif isinstance(decoded, str) and decoded:
            message = decoded
        if not message:
            message = f"Request failed ({status})"

        self.logger.info(
            "Store backend rejected request",
            method=method,
            url=url,
            status=status,
            detail=message,
        )
        raise RemoteAPIError(message, status_code=status, payload=decoded, errors=errors)
