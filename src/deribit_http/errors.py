"""
Error taxonomy for the Deribit HTTP client

Every failure surfaced by the client is a DeribitError subclass carrying
an ErrorKind, the server code and HTTP status when known, and the request
id of the call that produced it.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds"""
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    AUTH_FAILED = "auth_failed"
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    PROTOCOL_VIOLATION = "protocol_violation"
    RESPONSE_SHAPE = "response_shape"
    ENCODING_FAILED = "encoding_failed"
    MISSING_CREDENTIAL = "missing_credential"
    CANCELLED = "cancelled"


class TransportFailure(str, Enum):
    """Classification of transport-level failures"""
    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    DNS = "dns"
    TLS = "tls"
    OTHER = "other"


class DeribitError(Exception):
    """Base error class for every failure raised by the client"""

    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        http_status: Optional[int] = None,
        request_id: Optional[int] = None,
        data: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.request_id = request_id
        self.data = data

    def __str__(self) -> str:
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message


class TransportError(DeribitError):
    """TCP/TLS/DNS failure or socket hangup"""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        failure: TransportFailure = TransportFailure.OTHER,
        http_status: Optional[int] = None,
        request_id: Optional[int] = None
    ):
        super().__init__(message, http_status=http_status, request_id=request_id)
        self.failure = failure


class RequestTimeoutError(TransportError):
    """Per-call deadline elapsed"""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "Request timed out", request_id: Optional[int] = None):
        super().__init__(message, TransportFailure.TIMEOUT, request_id=request_id)


class RateLimitedError(DeribitError):
    """Server signalled rate-limit exhaustion"""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str = "too_many_requests", retry_after: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class UnauthorizedError(DeribitError):
    """Token rejected, scope insufficient or bad signature"""

    kind = ErrorKind.UNAUTHORIZED


class AuthFailedError(DeribitError):
    """The public/auth exchange was rejected"""

    kind = ErrorKind.AUTH_FAILED


class InvalidRequestError(DeribitError):
    """Server rejected the request parameters"""

    kind = ErrorKind.INVALID_REQUEST


class NotFoundError(DeribitError):
    """Instrument, order or method does not exist"""

    kind = ErrorKind.NOT_FOUND


class ServerError(DeribitError):
    """Any other JSON-RPC error returned by the server"""

    kind = ErrorKind.SERVER_ERROR


class ProtocolViolationError(DeribitError):
    """Malformed JSON-RPC envelope"""

    kind = ErrorKind.PROTOCOL_VIOLATION


class ResponseShapeError(DeribitError):
    """Envelope was valid but the result did not match the expected type"""

    kind = ErrorKind.RESPONSE_SHAPE

    def __init__(self, expected: str, raw: Any, request_id: Optional[int] = None):
        super().__init__(f"Result does not decode as {expected}", request_id=request_id, data=raw)
        self.expected = expected
        self.raw = raw


class EncodingFailedError(DeribitError):
    """Request parameters could not be serialized to a JSON object"""

    kind = ErrorKind.ENCODING_FAILED


class MissingCredentialError(DeribitError):
    """An authenticated endpoint was called without credentials"""

    kind = ErrorKind.MISSING_CREDENTIAL


class RequestCancelledError(DeribitError):
    """Call made on, or pending in, a closed session"""

    kind = ErrorKind.CANCELLED
