from __future__ import annotations

import asyncio
import logging
import time
from functools import lru_cache
from typing import Any, AsyncIterator, Dict, Mapping, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    HarvestSettings,
    load_env_config,
)
from .errors import (
    ConfigurationError,
    DeserializationError,
    HttpStatusError,
    RequestCancelledError,
    TransportError,
)
from .models import ResponseEnvelope
from .query import QueryParameters
from .request_builder import (
    DEFAULT_USER_AGENT,
    Endpoint,
    RequestConfiguration,
    RequestDescriptor,
    merge_headers,
)

ACCOUNT_ID_HEADER = "Harvest-Account-Id"


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


class HarvestClient:
    """
    Async client for the Harvest v2 API.
    - Builds requests from Endpoint descriptors and sends them over httpx
    - Injects bearer token and account id per call
    - No retries; every failure surfaces as a typed HarvestError
    """

    def __init__(
        self,
        *,
        access_token: str,
        account_id: str,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        access_token = access_token or ""
        account_id = str(account_id or "")

        if not base_url:
            raise ConfigurationError("base_url must be provided.")
        if not access_token:
            raise ConfigurationError("access_token must be provided.")
        if not account_id:
            raise ConfigurationError("account_id must be provided.")

        self.base_url = base_url
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("harvest_sdk.client")
        self._auth_headers = {
            "Authorization": f"Bearer {access_token}",
            ACCOUNT_ID_HEADER: account_id,
        }

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_settings(cls, settings: HarvestSettings, **kwargs) -> "HarvestClient":
        return cls(
            access_token=settings.access_token,
            account_id=settings.account_id,
            base_url=settings.base_url,
            user_agent=settings.user_agent,
            timeout_seconds=settings.timeout_seconds,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "HarvestClient":
        return cls.from_settings(load_env_config(), **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HarvestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Building ---

    def build(
        self,
        endpoint: Endpoint,
        path_parameters: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[RequestConfiguration] = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Build a descriptor for endpoint; 'baseurl' comes from this client."""
        params: Dict[str, Any] = {"baseurl": self.base_url}
        params.update(path_parameters or {})
        return endpoint.build(params, config, body, user_agent=self.user_agent)

    # --- Sending ---

    async def send(
        self,
        descriptor: RequestDescriptor,
        response_type: Any = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        endpoint: Optional[str] = None,
    ) -> Any:
        """
        Send a descriptor and interpret the response.
        - Raises TransportError when no response arrives (connect, timeout, protocol)
        - Raises HttpStatusError on non-2xx responses
        - Raises DeserializationError if a 2xx body doesn't match response_type
        - Raises RequestCancelledError if `cancel` is set before the response arrives
        - Returns None when response_type is None
        """
        if cancel is None:
            resp = await self._execute(descriptor, endpoint=endpoint)
        else:
            resp = await self._execute_cancellable(descriptor, cancel, endpoint=endpoint)

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, descriptor)

        if response_type is None:
            return None
        return self._deserialize(resp, descriptor, response_type)

    async def call(
        self,
        endpoint: Endpoint,
        path_parameters: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[RequestConfiguration] = None,
        body: Any = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> Any:
        descriptor = self.build(endpoint, path_parameters, config=config, body=body)
        return await self.send(
            descriptor, endpoint.response_type, cancel=cancel, endpoint=endpoint.name
        )

    async def paginate(
        self,
        endpoint: Endpoint,
        path_parameters: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[RequestConfiguration] = None,
    ) -> AsyncIterator[Any]:
        """
        Yield every item of a paginated list endpoint, following next_page.
        The endpoint's query type must declare a 'page' field.
        """
        if endpoint.query_type is None or "page" not in endpoint.query_type.model_fields:
            raise ConfigurationError(f"{endpoint.name} is not a paginated endpoint.")

        config = config or RequestConfiguration()
        query = endpoint.coerce_query(config.query)
        if query is None:
            query = endpoint.coerce_query({})
        if not isinstance(query, QueryParameters):
            raise ConfigurationError(f"{endpoint.name} needs a typed query to paginate.")

        while True:
            page_config = RequestConfiguration(headers=config.headers, query=query)
            envelope = await self.call(endpoint, path_parameters, config=page_config)
            if not isinstance(envelope, ResponseEnvelope):
                raise ConfigurationError(
                    f"{endpoint.name} does not return a paginated envelope."
                )
            for item in envelope.items:
                yield item
            current = envelope.page or getattr(query, "page", None) or 1
            if envelope.next_page is None or envelope.next_page <= current:
                break
            query = query.model_copy(update={"page": envelope.next_page})

    # --- Internals ---

    async def _execute(
        self, descriptor: RequestDescriptor, *, endpoint: Optional[str] = None
    ) -> httpx.Response:
        method = descriptor.method.value
        headers = merge_headers(self._auth_headers, descriptor.headers)
        start = time.perf_counter()

        try:
            resp = await self.http.request(
                method,
                descriptor.url,
                headers=headers,
                content=descriptor.body,
            )
        except httpx.HTTPError as exc:
            self.log.warning(
                "harvest.transport_error",
                extra={
                    "endpoint": endpoint,
                    "method": method,
                    "url": descriptor.url,
                    "error": type(exc).__name__,
                },
            )
            raise TransportError(
                f"Network error calling {method} {descriptor.url}: {exc}"
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "harvest.request",
            extra={
                "endpoint": endpoint,
                "method": method,
                "url": descriptor.url,
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )
        return resp

    async def _execute_cancellable(
        self,
        descriptor: RequestDescriptor,
        cancel: asyncio.Event,
        *,
        endpoint: Optional[str] = None,
    ) -> httpx.Response:
        if cancel.is_set():
            raise RequestCancelledError(
                f"{descriptor.method.value} {descriptor.url} cancelled before sending"
            )

        request_task = asyncio.ensure_future(
            self._execute(descriptor, endpoint=endpoint)
        )
        cancel_task = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not request_task.done():
                request_task.cancel()

        if request_task in done:
            return request_task.result()

        # Wait for the aborted request to unwind; its CancelledError is expected.
        await asyncio.gather(request_task, return_exceptions=True)
        raise RequestCancelledError(
            f"{descriptor.method.value} {descriptor.url} cancelled in flight"
        )

    def _deserialize(
        self, resp: httpx.Response, descriptor: RequestDescriptor, response_type: Any
    ) -> Any:
        try:
            return _adapter(response_type).validate_json(resp.content)
        except ValidationError as exc:
            snippet = (resp.text or "")[:500]
            raise DeserializationError(
                f"Unexpected payload from {descriptor.method.value} {descriptor.url}: "
                f"{exc.error_count()} error(s); body snippet: {snippet!r}"
            ) from exc

    def _to_http_error(
        self, resp: httpx.Response, descriptor: RequestDescriptor
    ) -> HttpStatusError:
        body = resp.text or ""
        response_json: Optional[Dict[str, Any]] = None
        message = resp.reason_phrase or "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            response_json = parsed
            # Harvest uses OAuth-style {"error", "error_description"} or {"message"}
            message = (
                parsed.get("error_description")
                or parsed.get("message")
                or parsed.get("error")
                or message
            )

        return HttpStatusError(
            status_code=resp.status_code,
            method=descriptor.method.value,
            url=descriptor.url,
            message=str(message),
            body=body,
            response_json=response_json,
        )


def create_client_from_env(**kwargs) -> HarvestClient:
    """Create a HarvestClient from HARVEST_* environment variables."""
    settings = load_env_config()
    if not settings.access_token or not settings.account_id:
        raise ConfigurationError(
            "Missing HARVEST_ACCESS_TOKEN or HARVEST_ACCOUNT_ID in environment."
        )
    return HarvestClient.from_settings(settings, **kwargs)


__all__ = ["HarvestClient", "create_client_from_env", "ACCOUNT_ID_HEADER"]
