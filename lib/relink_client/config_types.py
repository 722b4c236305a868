from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

__version__ = "0.1.0"

DEFAULT_HOST = "https://marlowe.relinklabs.com"
DEFAULT_VERSION = "1.0"
DEFAULT_TIMEOUT_S = 15.0
USER_AGENT = f"relink-client/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    api_secret: str = field(repr=False)
    host: str = DEFAULT_HOST
    version: str = DEFAULT_VERSION
    timeout_s: float = DEFAULT_TIMEOUT_S


@dataclass(frozen=True)
class RequestConfig:
    """Options applied to outgoing requests.

    ``None`` means the field is not set at this layer and the value from the
    layer below is kept when merging.
    """

    base_url: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    json: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash((self.base_url, tuple(sorted(self.headers.items())), self.json))


def merge_request_config(base: RequestConfig, override: RequestConfig) -> RequestConfig:
    """Return ``override`` layered on top of ``base``.

    Header names are case-insensitive: an override header replaces a base
    header of the same name, every other base header is kept.
    """
    headers = dict(base.headers)
    for name, value in override.headers.items():
        for existing in [k for k in headers if k.lower() == name.lower()]:
            del headers[existing]
        headers[name] = value

    return RequestConfig(
        base_url=override.base_url if override.base_url is not None else base.base_url,
        headers=headers,
        json=override.json if override.json is not None else base.json,
    )
