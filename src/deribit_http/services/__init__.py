"""
Services module for the Deribit HTTP client

Provides the session, authentication, rate limiting, request building,
response decoding, transports and the combined client.
"""

from .auth_service import AuthManager
from .rate_limiter import RateLimitGovernor, RateLimitState
from .request_builder import RequestBuilder, serialize_params
from .response_decoder import decode_envelope, decode_response, decode_result, map_rpc_error
from .transport import Transport, HttpxTransport
from .stub_transport import StubTransport, rpc_result, rpc_error, raw_response
from .session import DeribitSession, credentials_from_settings
from .deribit_client import DeribitClient

__all__ = [
    "AuthManager",
    "RateLimitGovernor",
    "RateLimitState",
    "RequestBuilder",
    "serialize_params",
    "decode_envelope",
    "decode_response",
    "decode_result",
    "map_rpc_error",
    "Transport",
    "HttpxTransport",
    "StubTransport",
    "rpc_result",
    "rpc_error",
    "raw_response",
    "DeribitSession",
    "credentials_from_settings",
    "DeribitClient",
]
