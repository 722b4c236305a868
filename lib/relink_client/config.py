from __future__ import annotations

import logging
import os

from .config_types import DEFAULT_HOST, DEFAULT_TIMEOUT_S, DEFAULT_VERSION, ClientConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_API_KEY = "RELINK_API_KEY"
ENV_API_SECRET = "RELINK_API_SECRET"

MISSING_CREDENTIALS = "Missing API key or API secret key"

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0"}

_WARNED_BASE_URL_SCHEME = False


def resolve_client_config(
        *,
        api_key: str | None = None,
        api_secret: str | None = None,
        host: str | None = None,
        version: str | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
) -> ClientConfig:
    # explicit arguments win over the environment
    key = api_key or os.getenv(ENV_API_KEY) or ""
    secret = api_secret or os.getenv(ENV_API_SECRET) or ""
    if not key or not secret:
        raise ConfigError(MISSING_CREDENTIALS)

    return ClientConfig(
        api_key=key,
        api_secret=secret,
        host=normalize_host(host) or DEFAULT_HOST,
        version=(version or "").strip() or DEFAULT_VERSION,
        timeout_s=float(timeout_s),
    )


def normalize_host(raw: str | None) -> str:
    """Return ``raw`` as an absolute URL without a trailing slash.

    A bare host gets ``https://``, or ``http://`` when it points at this machine.
    """
    host = (raw or "").strip().rstrip("/")
    if not host or host.lower().startswith(("http://", "https://")):
        return host

    hostname = host.split("/", 1)[0].rsplit(":", 1)[0].lower()
    scheme = "http" if hostname in _LOCAL_HOSTS else "https"
    url = f"{scheme}://{host}"
    _warn_missing_scheme(url)
    return url


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    logger.warning("host missing scheme, assuming %s", normalized)
    _WARNED_BASE_URL_SCHEME = True
