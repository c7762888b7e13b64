"""
JSON-RPC transport type definitions

Endpoint descriptors, outbound requests, raw HTTP responses and the
decoded response envelope.
"""

import json
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..constants import API_PATH_PREFIX

T = TypeVar("T")


class HttpVerb(str, Enum):
    GET = "GET"
    POST = "POST"


class AuthMode(str, Enum):
    """Authentication material attached to a request"""
    NONE = "none"
    BEARER = "bearer"
    SIGNED = "signed"


class Placement(str, Enum):
    """Where the request parameters travel"""
    QUERY = "query"
    JSON_BODY = "json_body"


class EndpointDescriptor(BaseModel):
    """Immutable description of one API method"""
    model_config = ConfigDict(frozen=True)

    method_name: str = Field(..., description="JSON-RPC method, e.g. public/get_time")
    http_verb: HttpVerb = Field(default=HttpVerb.GET, description="HTTP verb")
    auth: AuthMode = Field(default=AuthMode.NONE, description="Authentication mode")
    idempotent: Optional[bool] = Field(
        default=None,
        description="Replay safety; None means GET is safe and POST is not"
    )

    @computed_field
    @property
    def placement(self) -> Placement:
        if self.http_verb == HttpVerb.GET:
            return Placement.QUERY
        return Placement.JSON_BODY

    @property
    def path(self) -> str:
        return f"{API_PATH_PREFIX}/{self.method_name}"

    @property
    def is_idempotent(self) -> bool:
        """Whether a transport failure may be retried"""
        if self.idempotent is not None:
            return self.idempotent
        return self.http_verb == HttpVerb.GET

    def with_auth(self, auth: AuthMode) -> "EndpointDescriptor":
        """Copy of this descriptor with a different auth mode"""
        return self.model_copy(update={"auth": auth})


class DeribitRequest(BaseModel):
    """Fully formed outbound request"""
    verb: HttpVerb = Field(..., description="HTTP verb")
    path: str = Field(..., description="Request path, /api/v2/<method>")
    method_name: str = Field(..., description="JSON-RPC method name")
    headers: Dict[str, str] = Field(default_factory=dict, description="HTTP headers")
    query: Dict[str, str] = Field(default_factory=dict, description="Query parameters, insertion ordered")
    body: Optional[str] = Field(default=None, description="JSON-RPC body for POST")
    request_id: int = Field(..., description="JSON-RPC id and log correlation id")

    @property
    def query_string(self) -> str:
        """Percent-encoded query in insertion order"""
        return "&".join(
            f"{quote(key, safe='')}={quote(value, safe='')}"
            for key, value in self.query.items()
        )

    @property
    def params(self) -> Dict[str, Any]:
        """Parameters as sent, regardless of placement"""
        if self.body is not None:
            return json.loads(self.body).get("params", {})
        return dict(self.query)


class HttpResponse(BaseModel):
    """Raw HTTP response handed back by a transport"""
    status: int = Field(..., description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Headers with lowercased names")
    body: bytes = Field(default=b"", description="Raw response body")

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


class RpcErrorDetail(BaseModel):
    """JSON-RPC error object"""
    code: int = Field(..., description="Error code")
    message: str = Field(default="", description="Error message")
    data: Optional[Any] = Field(default=None, description="Additional error data")


class ServerTiming(BaseModel):
    """Server timing fields reported in every envelope"""
    us_in: Optional[int] = Field(default=None, description="Request received (microseconds)")
    us_out: Optional[int] = Field(default=None, description="Response sent (microseconds)")
    us_diff: Optional[int] = Field(default=None, description="Processing time (microseconds)")
    testnet: Optional[bool] = Field(default=None, description="Whether the server is testnet")
    request_id: Optional[int] = Field(default=None, description="Request id")


class RpcEnvelope(BaseModel):
    """Decoded JSON-RPC 2.0 response envelope"""
    model_config = ConfigDict(populate_by_name=True)

    jsonrpc: str = Field(..., description="JSON-RPC version")
    id: Optional[int] = Field(default=None, description="Request id echoed by the server")
    result: Optional[Any] = Field(default=None, description="Raw result")
    error: Optional[RpcErrorDetail] = Field(default=None, description="Error object")
    us_in: Optional[int] = Field(default=None, alias="usIn", description="Request timestamp (microseconds)")
    us_out: Optional[int] = Field(default=None, alias="usOut", description="Response timestamp (microseconds)")
    us_diff: Optional[int] = Field(default=None, alias="usDiff", description="Processing time (microseconds)")
    testnet: Optional[bool] = Field(default=None, description="Whether this is testnet")

    @property
    def timing(self) -> ServerTiming:
        us_diff = None
        if self.us_in is not None and self.us_out is not None:
            us_diff = self.us_out - self.us_in
        return ServerTiming(
            us_in=self.us_in,
            us_out=self.us_out,
            us_diff=us_diff,
            testnet=self.testnet,
            request_id=self.id
        )


class RpcResult(BaseModel, Generic[T]):
    """Typed result together with the server timing of the call"""
    result: T = Field(..., description="Decoded result")
    timing: ServerTiming = Field(default_factory=ServerTiming, description="Server timing")
