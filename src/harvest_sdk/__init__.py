"""harvest_sdk package exports."""

from ._version import __version__
from .client import ACCOUNT_ID_HEADER, HarvestClient, create_client_from_env
from .config import DEFAULT_BASE_URL, HarvestSettings, load_env_config
from .errors import (
    ConfigurationError,
    DeserializationError,
    HarvestError,
    HttpStatusError,
    RequestCancelledError,
    TransportError,
)
from .models import PaginationLinks, ResponseEnvelope
from .query import (
    ActiveQueryParameters,
    ExpensesQueryParameters,
    PaginatedQueryParameters,
    QueryParameters,
    ReportsQueryParameters,
    TimeReportsQueryParameters,
    format_query_value,
)
from .request_builder import (
    DEFAULT_USER_AGENT,
    Endpoint,
    Method,
    RequestConfiguration,
    RequestDescriptor,
    build_request,
)
from .uri_template import expand

__all__ = [
    "__version__",
    # Client
    "HarvestClient",
    "create_client_from_env",
    "ACCOUNT_ID_HEADER",
    # Config
    "HarvestSettings",
    "load_env_config",
    "DEFAULT_BASE_URL",
    # Exceptions
    "HarvestError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "DeserializationError",
    "RequestCancelledError",
    # Request building
    "Method",
    "Endpoint",
    "RequestDescriptor",
    "RequestConfiguration",
    "build_request",
    "expand",
    "DEFAULT_USER_AGENT",
    # Query parameters
    "QueryParameters",
    "PaginatedQueryParameters",
    "ActiveQueryParameters",
    "ExpensesQueryParameters",
    "ReportsQueryParameters",
    "TimeReportsQueryParameters",
    "format_query_value",
    # Envelopes
    "ResponseEnvelope",
    "PaginationLinks",
]
