from __future__ import annotations


class RelinkClientError(Exception):
    """Base client error."""


class ConfigError(RelinkClientError):
    """Missing or invalid client configuration."""


class TransportError(RelinkClientError):
    """A request did not complete successfully."""


class NetworkError(TransportError):
    """Transport/network layer error."""


class ApiError(TransportError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""
