"""
HTTP transport capability

The session talks to the network only through a Transport, so tests can
substitute an in-memory recorder for the httpx implementation.
"""

import socket
import ssl
import time
from typing import Optional, Protocol

import httpx

from ..errors import RequestTimeoutError, TransportError, TransportFailure
from ..models.rpc_types import DeribitRequest, HttpResponse
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class Transport(Protocol):
    async def send(self, request: DeribitRequest, *, timeout: float) -> HttpResponse:
        """Perform one HTTP round-trip"""
        ...

    async def aclose(self) -> None:
        ...


def classify_connect_error(exc: BaseException) -> TransportFailure:
    """Walk the cause chain of a connection failure"""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLError):
            return TransportFailure.TLS
        if isinstance(current, socket.gaierror):
            return TransportFailure.DNS
        if isinstance(current, ConnectionRefusedError):
            return TransportFailure.CONNECTION_REFUSED
        current = current.__cause__ or current.__context__

    message = str(exc).lower()
    if "ssl" in message or "certificate" in message:
        return TransportFailure.TLS
    if "name or service not known" in message or "nodename nor servname" in message or "getaddrinfo" in message:
        return TransportFailure.DNS
    if "connection refused" in message:
        return TransportFailure.CONNECTION_REFUSED
    return TransportFailure.OTHER


class HttpxTransport:
    """Transport over one httpx.AsyncClient connection pool"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def aclose(self) -> None:
        """Close HTTP client"""
        if not self._client.is_closed:
            await self._client.aclose()

    async def send(self, request: DeribitRequest, *, timeout: float) -> HttpResponse:
        url = request.path
        query_string = request.query_string
        if query_string:
            url = f"{url}?{query_string}"

        content = request.body.encode('utf-8') if request.body is not None else None

        started = time.monotonic()
        try:
            response = await self._client.request(
                request.verb.value,
                url,
                headers=request.headers,
                content=content,
                timeout=timeout
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"{request.method_name} timed out after {timeout}s",
                request_id=request.request_id
            ) from exc
        except httpx.ConnectError as exc:
            failure = classify_connect_error(exc)
            raise TransportError(
                f"Connection failed ({failure.value}): {exc}",
                failure,
                request_id=request.request_id
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                f"Transport failure: {exc}",
                TransportFailure.OTHER,
                request_id=request.request_id
            ) from exc

        logger.debug(
            "HTTP response",
            request_id=request.request_id,
            status=response.status_code,
            elapsed_ms=int((time.monotonic() - started) * 1000)
        )

        return HttpResponse(
            status=response.status_code,
            headers={name.lower(): value for name, value in response.headers.items()},
            body=response.content
        )
