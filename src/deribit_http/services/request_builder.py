"""
JSON-RPC request builder

Turns an endpoint descriptor and a parameter value into a DeribitRequest:
query or body placement, User-Agent, and bearer or deri-hmac-sha256
authorization.
"""

import json
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ..constants import DEFAULT_USER_AGENT
from ..errors import EncodingFailedError, MissingCredentialError
from ..models.auth_types import ApiKeyCredentials, Credentials
from ..models.rpc_types import AuthMode, DeribitRequest, EndpointDescriptor, HttpVerb
from ..utils.clock import Clock, SystemClock
from ..utils.signature import format_authorization_header, generate_nonce, sign_request


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def serialize_params(params: Any) -> Dict[str, Any]:
    """
    Serialize a parameter value to a JSON object

    Pydantic models are dumped by alias; top-level None values are dropped.

    Raises:
        EncodingFailedError: the value is not serializable or not an object
    """
    if params is None:
        return {}

    try:
        if isinstance(params, BaseModel):
            value = params.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            value = to_jsonable_python(params)
        # rejects NaN/Infinity, which Deribit cannot parse
        compact_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodingFailedError(f"Parameters are not JSON serializable: {exc}") from exc

    if not isinstance(value, Mapping):
        raise EncodingFailedError(
            f"Parameters must serialize to a JSON object, got {type(value).__name__}"
        )

    return {str(key): item for key, item in value.items() if item is not None}


def query_value(value: Any) -> str:
    """Stringify one query parameter"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return compact_json(value)
    return str(value)


class RequestBuilder:
    """Builds outbound requests for one session"""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        default_headers: Optional[Dict[str, str]] = None,
        clock: Optional[Clock] = None,
        nonce_factory: Callable[[], str] = generate_nonce
    ):
        self.user_agent = user_agent
        self.default_headers = dict(default_headers or {})
        self.clock = clock or SystemClock()
        self.nonce_factory = nonce_factory

    def build(
        self,
        endpoint: EndpointDescriptor,
        params: Any,
        request_id: int,
        bearer_token: Optional[str] = None,
        credentials: Optional[Credentials] = None
    ) -> DeribitRequest:
        """
        Build a request

        Args:
            endpoint: Endpoint descriptor
            params: Pydantic model, mapping or None
            request_id: JSON-RPC id
            bearer_token: Access token for Bearer endpoints
            credentials: API key pair for Signed endpoints

        Raises:
            EncodingFailedError: params do not serialize to a JSON object
            MissingCredentialError: the endpoint needs auth material that is absent
        """
        param_map = serialize_params(params)

        headers = {**self.default_headers, "User-Agent": self.user_agent}
        query: Dict[str, str] = {}
        body: Optional[str] = None

        if endpoint.http_verb == HttpVerb.GET:
            query = {key: query_value(value) for key, value in param_map.items()}
        else:
            body = compact_json({
                "jsonrpc": "2.0",
                "id": request_id,
                "method": endpoint.method_name,
                "params": param_map
            })
            headers["Content-Type"] = "application/json"

        request = DeribitRequest(
            verb=endpoint.http_verb,
            path=endpoint.path,
            method_name=endpoint.method_name,
            headers=headers,
            query=query,
            body=body,
            request_id=request_id
        )

        if endpoint.auth == AuthMode.BEARER:
            if not bearer_token:
                raise MissingCredentialError(
                    f"{endpoint.method_name} requires a bearer token",
                    request_id=request_id
                )
            request.headers["Authorization"] = f"Bearer {bearer_token}"
        elif endpoint.auth == AuthMode.SIGNED:
            if not isinstance(credentials, ApiKeyCredentials):
                raise MissingCredentialError(
                    f"{endpoint.method_name} requires an API key pair for signing",
                    request_id=request_id
                )
            request.headers["Authorization"] = self._signature_header(request, credentials)

        return request

    def _signature_header(self, request: DeribitRequest, credentials: ApiKeyCredentials) -> str:
        timestamp = self.clock.time_ms()
        nonce = self.nonce_factory()
        data = request.body if request.body is not None else request.query_string
        signature = sign_request(
            credentials.client_secret,
            timestamp,
            nonce,
            request.verb.value,
            request.path,
            data
        )
        return format_authorization_header(credentials.client_id, timestamp, signature, nonce)
