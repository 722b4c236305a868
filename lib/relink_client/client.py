from __future__ import annotations

import base64
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import MISSING_CREDENTIALS, normalize_host, resolve_client_config
from .config_types import DEFAULT_HOST, USER_AGENT, ClientConfig, RequestConfig
from .errors import ApiError, ConfigError
from .transport import Transport

logger = logging.getLogger(__name__)


class RelinkClient:
    """Async client for the Relink Marlowe API.

    Call :meth:`get_access_token` first; the bearer token it returns is
    attached to every later request. Tokens expire after 60 minutes on the
    server side. Catch :class:`~relink_client.errors.AuthError` and fetch a
    new one when that happens.
    """

    def __init__(
            self,
            cfg: ClientConfig | None = None,
            *,
            http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        if cfg is None:
            cfg = resolve_client_config()
        if not cfg.api_key or not cfg.api_secret:
            raise ConfigError(MISSING_CREDENTIALS)

        self._cfg = cfg
        self.api_key = cfg.api_key
        self.api_secret = cfg.api_secret
        self.host = normalize_host(cfg.host) or DEFAULT_HOST
        self.version = cfg.version
        self.access_token = ""

        self._t = Transport(
            RequestConfig(base_url=self.host, headers={"User-Agent": USER_AGENT}, json=True),
            timeout_s=cfg.timeout_s,
            http_transport=http_transport,
        )

    async def __aenter__(self) -> RelinkClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._t.aclose()

    @property
    def request_defaults(self) -> RequestConfig:
        return self._t.defaults

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    # --- auth ---
    async def get_access_token(self) -> str:
        raw = f"{self.api_key}:{self.api_secret}".encode("utf-8")
        basic = base64.b64encode(raw).decode("ascii")
        data = await self._t.request("/token", method="GET", headers={"Authorization": f"Basic {basic}"})
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise ApiError(500, "token endpoint returned no token", None)
        self.set_access_token(token)
        logger.debug("access token refreshed")
        return token

    def set_access_token(self, token: str) -> None:
        self.access_token = token
        self._t.set_defaults(
            RequestConfig(
                base_url=self.host,
                headers={"Authorization": f"Bearer {token}"},
                json=True,
            )
        )

    # --- jobs ---
    async def create_job(self, data: dict[str, Any]) -> Any:
        return await self._t.request("/jobs", method="POST", body=data)

    async def get_job(self, job_id: str) -> Any:
        return await self._t.request(_job_path(job_id), method="GET")

    async def get_jobs(self, query: dict[str, Any] | None = None) -> Any:
        return await self._t.request("/jobs", method="GET", params=query)

    async def update_job(self, job_id: str, data: dict[str, Any]) -> Any:
        return await self._t.request(_job_path(job_id), method="PUT", body=data)

    async def delete_job(self, job_id: str) -> None:
        await self._t.request(_job_path(job_id), method="DELETE")

    # --- analysis / social / status ---
    async def create_analysis(self, job_id: str, profile: dict[str, Any]) -> Any:
        body = {"jobId": job_id, "profile": profile}
        return await self._t.request("/analyze", method="POST", body=body)

    async def get_social_data(self, email: str) -> Any:
        return await self._t.request("/social", method="GET", params={"email": email})

    async def update_status(self, *, job_id: str, email: str, status: str) -> Any:
        body = {"jobId": job_id, "email": email, "status": status}
        return await self._t.request("/status", method="POST", body=body)


def _job_path(job_id: str) -> str:
    return f"/jobs/{quote(str(job_id), safe='')}"
