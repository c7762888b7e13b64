"""
In-memory transport for testing and development

Answers requests from scripted replies without making real API calls, and
records every request together with its departure time on the clock.
"""

import inspect
import json
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Union

from ..models.rpc_types import DeribitRequest, HttpResponse
from ..utils.clock import Clock, SystemClock

Reply = Union[
    HttpResponse,
    BaseException,
    Callable[[DeribitRequest], Union[HttpResponse, Awaitable[HttpResponse]]],
]


def _envelope(request: DeribitRequest, payload: Dict[str, Any], testnet: bool) -> bytes:
    envelope: Dict[str, Any] = {"jsonrpc": "2.0", "id": request.request_id}
    envelope.update(payload)
    envelope.update({
        "usIn": 1700000000000000,
        "usOut": 1700000000000250,
        "usDiff": 250,
        "testnet": testnet
    })
    return json.dumps(envelope).encode('utf-8')


def rpc_result(
    result: Any,
    status: int = 200,
    headers: Optional[Dict[str, str]] = None,
    testnet: bool = True
) -> Callable[[DeribitRequest], HttpResponse]:
    """Reply with a result envelope echoing the request id"""
    def build(request: DeribitRequest) -> HttpResponse:
        return HttpResponse(
            status=status,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body=_envelope(request, {"result": result}, testnet)
        )
    return build


def rpc_error(
    code: int,
    message: str,
    data: Any = None,
    status: int = 400,
    headers: Optional[Dict[str, str]] = None,
    testnet: bool = True
) -> Callable[[DeribitRequest], HttpResponse]:
    """Reply with an error envelope echoing the request id"""
    def build(request: DeribitRequest) -> HttpResponse:
        error: Dict[str, Any] = {"code": code, "message": message}
        if data is not None:
            error["data"] = data
        return HttpResponse(
            status=status,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body=_envelope(request, {"error": error}, testnet)
        )
    return build


def raw_response(status: int, body: Union[bytes, str] = b"", headers: Optional[Dict[str, str]] = None) -> HttpResponse:
    if isinstance(body, str):
        body = body.encode('utf-8')
    return HttpResponse(
        status=status,
        headers={k.lower(): v for k, v in (headers or {}).items()},
        body=body
    )


class StubTransport:
    """Scripted transport keyed by JSON-RPC method name"""

    def __init__(self, clock: Optional[Clock] = None, latency: float = 0.0):
        self.clock = clock or SystemClock()
        self.latency = latency
        self.requests: List[DeribitRequest] = []
        self.sent_at: List[float] = []
        self.closed = False
        self._queued: Dict[str, Deque[Reply]] = defaultdict(deque)
        self._routes: Dict[str, Reply] = {}

    def route(self, method_name: str, reply: Reply) -> "StubTransport":
        """Answer every call to method_name with reply"""
        self._routes[method_name] = reply
        return self

    def enqueue(self, method_name: str, *replies: Reply) -> "StubTransport":
        """One-shot replies, consumed in order before the route"""
        self._queued[method_name].extend(replies)
        return self

    def requests_for(self, method_name: str) -> List[DeribitRequest]:
        return [request for request in self.requests if request.method_name == method_name]

    def departures_for(self, method_name: str) -> List[float]:
        return [
            sent_at for request, sent_at in zip(self.requests, self.sent_at)
            if request.method_name == method_name
        ]

    async def aclose(self) -> None:
        self.closed = True

    def _next_reply(self, method_name: str) -> Reply:
        queue = self._queued.get(method_name)
        if queue:
            return queue.popleft()
        if method_name in self._routes:
            return self._routes[method_name]
        return rpc_error(-32601, "Method not found", status=404)

    async def send(self, request: DeribitRequest, *, timeout: float) -> HttpResponse:
        self.requests.append(request)
        self.sent_at.append(self.clock.now())

        if self.latency:
            await self.clock.sleep(self.latency)

        reply = self._next_reply(request.method_name)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, HttpResponse):
            return reply

        response = reply(request)
        if inspect.isawaitable(response):
            response = await response
        return response
