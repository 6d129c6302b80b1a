from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, Union

import pydantic_core
from pydantic import BaseModel, ValidationError

from ._version import __version__
from .errors import ConfigurationError
from .query import QueryParameters, format_query_mapping
from .uri_template import expand

DEFAULT_USER_AGENT = f"harvest-sdk-python/{__version__}"
JSON_CONTENT_TYPE = "application/json"

QueryInput = Union[QueryParameters, Mapping[str, Any]]


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully-resolved request, ready to hand to a transport."""

    method: Method
    url_template: str
    url: str
    path_parameters: Mapping[str, Any]
    query_parameters: Optional[Mapping[str, str]]
    headers: Mapping[str, str]
    body: Optional[str] = None


@dataclass(frozen=True)
class RequestConfiguration:
    """Per-call extras: headers layered over the defaults and the query parameter set."""

    headers: Mapping[str, str] = field(default_factory=dict)
    query: Optional[QueryInput] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))


def merge_headers(
    defaults: Mapping[str, str], extra: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    """
    Layer caller headers over defaults.
    Keys compare case-insensitively; a match replaces the default's value in place.
    """
    merged = dict(defaults)
    by_lower = {k.lower(): k for k in merged}
    for key, value in (extra or {}).items():
        existing = by_lower.get(key.lower())
        if existing is not None:
            merged[existing] = value
        else:
            merged[key] = value
            by_lower[key.lower()] = key
    return merged


def serialize_body(body: Any) -> Optional[str]:
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_unset=True)
    try:
        return pydantic_core.to_json(body).decode("utf-8")
    except pydantic_core.PydanticSerializationError as exc:
        raise ConfigurationError(f"Request body is not JSON serializable: {exc}") from exc


def _resolve_query(query: Optional[QueryInput]) -> Optional[Dict[str, str]]:
    if query is None:
        return None
    if isinstance(query, QueryParameters):
        return query.to_query()
    return format_query_mapping(query)


def build_request(
    url_template: str,
    path_parameters: Mapping[str, Any],
    query: Optional[QueryInput] = None,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    *,
    method: Method = Method.GET,
    expects_json: bool = True,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RequestDescriptor:
    """
    Build a request descriptor without touching the network.

    Raises ConfigurationError when a path parameter is missing or of the wrong
    kind, or when a query value or body cannot be serialized.
    """
    if path_parameters is None:
        raise ConfigurationError("path_parameters must be provided.")

    query_values = _resolve_query(query)
    url = expand(url_template, path_parameters, query_values)

    defaults = {"User-Agent": user_agent}
    if expects_json:
        defaults["Accept"] = JSON_CONTENT_TYPE

    content = serialize_body(body)
    if content is not None:
        defaults["Content-Type"] = JSON_CONTENT_TYPE

    return RequestDescriptor(
        method=Method(method),
        url_template=url_template,
        url=url,
        path_parameters=MappingProxyType(dict(path_parameters)),
        query_parameters=(
            MappingProxyType(query_values) if query_values is not None else None
        ),
        headers=MappingProxyType(merge_headers(defaults, headers)),
        body=content,
    )


@dataclass(frozen=True)
class Endpoint:
    """
    One Harvest operation: verb, URL template and the types flowing through it.
    response_type=None means the operation returns no body (DELETE).
    """

    name: str
    method: Method
    url_template: str
    query_type: Optional[Type[QueryParameters]] = None
    body_type: Optional[Type[BaseModel]] = None
    response_type: Any = None

    def coerce_query(self, query: Optional[QueryInput]) -> Optional[QueryInput]:
        """
        Validate a plain mapping into this endpoint's query type.
        A typed query must be an instance of that type.
        """
        if query is None or self.query_type is None:
            return query
        if isinstance(query, QueryParameters):
            if not isinstance(query, self.query_type):
                raise ConfigurationError(
                    f"{self.name} expects {self.query_type.__name__}, "
                    f"got {type(query).__name__}."
                )
            return query
        try:
            return self.query_type.model_validate(dict(query))
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid query parameters for {self.name}: {exc}"
            ) from exc

    def build(
        self,
        path_parameters: Mapping[str, Any],
        config: Optional[RequestConfiguration] = None,
        body: Any = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> RequestDescriptor:
        if self.body_type is not None and body is None:
            raise ConfigurationError(f"{self.name} requires a request body.")

        config = config or RequestConfiguration()
        return build_request(
            self.url_template,
            path_parameters,
            self.coerce_query(config.query),
            body,
            config.headers,
            method=self.method,
            expects_json=self.response_type is not None,
            user_agent=user_agent,
        )


__all__ = [
    "DEFAULT_USER_AGENT",
    "Method",
    "RequestDescriptor",
    "RequestConfiguration",
    "Endpoint",
    "build_request",
    "merge_headers",
    "serialize_body",
]
