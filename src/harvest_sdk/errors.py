from typing import Any, Dict, Optional


class HarvestError(Exception):
    """Base error for SDK failures."""


class ConfigurationError(HarvestError, ValueError):
    """Raised before any I/O when a required parameter or setting is missing or invalid."""


class TransportError(HarvestError):
    """The request never produced an HTTP response (DNS, connect, timeout, protocol)."""


class HttpStatusError(HarvestError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        body: str = "",
        response_json: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.body = body
        self.response_json = response_json


class DeserializationError(HarvestError):
    """The server answered 2xx but the payload did not match the expected shape."""


class RequestCancelledError(HarvestError):
    """The caller's cancel event fired while the request was in flight."""


__all__ = [
    "HarvestError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "DeserializationError",
    "RequestCancelledError",
]
