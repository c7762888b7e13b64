"""
JSON-RPC response decoder and error mapper

Validates the {jsonrpc, id, result|error, usIn, usOut, ...} envelope,
maps server error codes to the error taxonomy, and decodes results into
the caller's expected type.
"""

import json
import time
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import (
    DeribitError,
    InvalidRequestError,
    NotFoundError,
    ProtocolViolationError,
    RateLimitedError,
    ResponseShapeError,
    ServerError,
    TransportError,
    TransportFailure,
    UnauthorizedError,
)
from ..models.rpc_types import HttpResponse, RpcEnvelope, RpcResult

RATE_LIMIT_CODES = frozenset({10028})
UNAUTHORIZED_CODES = frozenset({10000, 13004, 13009, 13021, 13403})
INVALID_REQUEST_CODES = frozenset({-32600, -32602, 11029, 11050, 13010})
NOT_FOUND_CODES = frozenset({-32601, 10004, 13020})

# token rejected or expired; the session re-authenticates once on these
REAUTH_CODES = frozenset({13004, 13009})

_adapters: Dict[Any, TypeAdapter] = {}


def parse_retry_after(value: Optional[str], now: Optional[float] = None) -> Optional[float]:
    """
    Parse a Retry-After header

    Args:
        value: Delay in seconds or an HTTP date
        now: Epoch seconds used for HTTP dates

    Returns:
        Non-negative delay in seconds, or None when absent or unparseable
    """
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at is None:
        return None
    return max(0.0, retry_at.timestamp() - (time.time() if now is None else now))


def map_rpc_error(
    code: int,
    message: str,
    data: Any = None,
    http_status: Optional[int] = None,
    request_id: Optional[int] = None,
    retry_after: Optional[float] = None
) -> DeribitError:
    """Map a server error to its error kind; unknown codes become ServerError"""
    kwargs = dict(code=code, http_status=http_status, request_id=request_id, data=data)
    if code in RATE_LIMIT_CODES or http_status == 429:
        return RateLimitedError(message, retry_after=retry_after, **kwargs)
    if code in UNAUTHORIZED_CODES:
        return UnauthorizedError(message, **kwargs)
    if code in INVALID_REQUEST_CODES:
        return InvalidRequestError(message, **kwargs)
    if code in NOT_FOUND_CODES:
        return NotFoundError(message, **kwargs)
    return ServerError(message, **kwargs)


def _not_an_envelope(
    response: HttpResponse,
    reason: str,
    request_id: Optional[int],
    retry_after: Optional[float]
) -> DeribitError:
    if response.status == 429:
        return RateLimitedError(
            "HTTP 429 Too Many Requests",
            retry_after=retry_after,
            http_status=429,
            request_id=request_id
        )
    if not 200 <= response.status < 300:
        return TransportError(
            f"HTTP {response.status}: {reason}",
            TransportFailure.OTHER,
            http_status=response.status,
            request_id=request_id
        )
    return ProtocolViolationError(reason, http_status=response.status, request_id=request_id)


def decode_envelope(response: HttpResponse, expected_id: Optional[int] = None) -> RpcEnvelope:
    """
    Decode and validate the response envelope

    A missing id is accepted since Deribit omits it on GET responses.

    Raises:
        ProtocolViolationError: malformed envelope or id mismatch
        TransportError: non-2xx response without a JSON-RPC body
        RateLimitedError: HTTP 429, or server error code 10028
        DeribitError: the mapped server error when the envelope carries one
    """
    retry_after = parse_retry_after(response.header("retry-after"))

    try:
        payload = json.loads(response.body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise _not_an_envelope(response, "Response body is not JSON", expected_id, retry_after) from exc

    if not isinstance(payload, dict):
        raise _not_an_envelope(response, "Response body is not a JSON object", expected_id, retry_after)

    if payload.get("jsonrpc") != "2.0":
        raise _not_an_envelope(response, "Missing or invalid jsonrpc marker", expected_id, retry_after)

    has_result = "result" in payload
    has_error = "error" in payload
    if has_result and has_error:
        raise ProtocolViolationError(
            "Envelope carries both result and error",
            http_status=response.status,
            request_id=expected_id
        )
    if not has_result and not has_error:
        raise _not_an_envelope(response, "Envelope carries neither result nor error", expected_id, retry_after)

    try:
        envelope = RpcEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ProtocolViolationError(
            f"Malformed envelope: {exc.error_count()} validation errors",
            http_status=response.status,
            request_id=expected_id
        ) from exc

    if envelope.id is not None and expected_id is not None and envelope.id != expected_id:
        raise ProtocolViolationError(
            f"Response id {envelope.id} does not match request id {expected_id}",
            http_status=response.status,
            request_id=expected_id
        )

    if envelope.error is not None:
        raise map_rpc_error(
            envelope.error.code,
            envelope.error.message,
            data=envelope.error.data,
            http_status=response.status,
            request_id=expected_id,
            retry_after=retry_after
        )

    return envelope


def _type_name(result_type: Any) -> str:
    return getattr(result_type, "__name__", None) or repr(result_type)


def _adapter(result_type: Any) -> TypeAdapter:
    try:
        adapter = _adapters.get(result_type)
    except TypeError:
        return TypeAdapter(result_type)
    if adapter is None:
        adapter = TypeAdapter(result_type)
        _adapters[result_type] = adapter
    return adapter


def decode_result(envelope: RpcEnvelope, result_type: Any = Any, request_id: Optional[int] = None) -> Any:
    """
    Decode the envelope result into result_type

    Raises:
        ResponseShapeError: the result does not validate as result_type
    """
    if result_type is Any:
        return envelope.result
    try:
        return _adapter(result_type).validate_python(envelope.result)
    except ValidationError as exc:
        raise ResponseShapeError(_type_name(result_type), envelope.result, request_id=request_id) from exc


def decode_response(response: HttpResponse, expected_id: Optional[int], result_type: Any = Any) -> RpcResult:
    """Envelope validation, error mapping and result decoding in one step"""
    envelope = decode_envelope(response, expected_id)
    result = decode_result(envelope, result_type, expected_id)
    return RpcResult(result=result, timing=envelope.timing)
