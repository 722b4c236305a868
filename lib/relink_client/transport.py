from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from .config_types import DEFAULT_TIMEOUT_S, RequestConfig, merge_request_config
from .errors import ApiError, AuthError, NetworkError

logger = logging.getLogger(__name__)


class Transport:
    """Thin wrapper around ``httpx.AsyncClient``.

    Every request is built from the transport's own defaults merged with the
    per-call options. Defaults are per instance, so independent clients with
    different tokens can share a process.
    """

    def __init__(
            self,
            defaults: RequestConfig,
            *,
            timeout_s: float = DEFAULT_TIMEOUT_S,
            http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._defaults = defaults
        self._client = httpx.AsyncClient(
            timeout=timeout_s,
            follow_redirects=True,
            transport=http_transport,
        )

    @property
    def defaults(self) -> RequestConfig:
        return self._defaults

    def set_defaults(self, options: RequestConfig) -> RequestConfig:
        self._defaults = merge_request_config(self._defaults, options)
        return self._defaults

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
            self,
            url: str,
            *,
            method: str | None = "GET",
            headers: Mapping[str, str] | None = None,
            params: Mapping[str, Any] | None = None,
            body: Any | None = None,
    ) -> Any:
        cfg = merge_request_config(self._defaults, RequestConfig(headers=dict(headers or {})))
        method = (method or "GET").upper()
        target = _resolve_url(cfg.base_url, url)
        json_mode = cfg.json is not False

        kwargs: dict[str, Any] = {}
        if body is not None:
            if json_mode:
                kwargs["json"] = body
            elif isinstance(body, (str, bytes)):
                kwargs["content"] = body
            else:
                kwargs["data"] = body

        try:
            r = await self._client.request(method, target, headers=dict(cfg.headers), params=params, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        logger.debug("%s %s -> %s", method, target, r.status_code)

        data: Any = None
        parsed = False
        text = r.text if r.content else ""
        if text and json_mode:
            try:
                data = r.json()
                parsed = True
            except ValueError:
                data = None

        if r.status_code >= 400:
            msg = f"{method} {target} failed with {r.status_code}"
            details = None

            if isinstance(data, dict):
                details = json.dumps(data, ensure_ascii=False)
                detail = data.get("detail") or data.get("message") or data.get("error")
                if detail:
                    msg = str(detail)
            elif text:
                details = text[:1000]

            if r.status_code in (401, 403):
                raise AuthError(r.status_code, msg, details)
            raise ApiError(r.status_code, msg, details)

        if parsed:
            return data
        return text or None


def _resolve_url(base_url: str | None, url: str) -> str:
    lowered = url.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return url
    if not base_url:
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"
