"""
Deribit HTTP client

Async JSON-RPC over HTTP client for the Deribit v2 API with OAuth 2.0
token management, request signing and client side rate limiting.
"""

import logging

from .constants import CLIENT_VERSION
from .config.config_loader import ConfigLoader  # noqa: F401
from .config.settings import DeribitSettings, settings  # noqa: F401
from .errors import (  # noqa: F401
    ErrorKind,
    TransportFailure,
    DeribitError,
    TransportError,
    RequestTimeoutError,
    RateLimitedError,
    UnauthorizedError,
    AuthFailedError,
    InvalidRequestError,
    NotFoundError,
    ServerError,
    ProtocolViolationError,
    ResponseShapeError,
    EncodingFailedError,
    MissingCredentialError,
    RequestCancelledError,
)
from .models.auth_types import ApiKeyCredentials, BearerCredentials, AuthToken, AuthStatus  # noqa: F401
from .models.rpc_types import EndpointDescriptor, HttpVerb, AuthMode, ServerTiming  # noqa: F401
from .api import endpoints  # noqa: F401
from .services.session import DeribitSession  # noqa: F401
from .services.deribit_client import DeribitClient  # noqa: F401

logging.getLogger("deribit_http").addHandler(logging.NullHandler())

__version__ = CLIENT_VERSION

__all__ = [
    "__version__",
    "ConfigLoader",
    "DeribitSettings",
    "settings",
    "ErrorKind",
    "TransportFailure",
    "DeribitError",
    "TransportError",
    "RequestTimeoutError",
    "RateLimitedError",
    "UnauthorizedError",
    "AuthFailedError",
    "InvalidRequestError",
    "NotFoundError",
    "ServerError",
    "ProtocolViolationError",
    "ResponseShapeError",
    "EncodingFailedError",
    "MissingCredentialError",
    "RequestCancelledError",
    "ApiKeyCredentials",
    "BearerCredentials",
    "AuthToken",
    "AuthStatus",
    "EndpointDescriptor",
    "HttpVerb",
    "AuthMode",
    "ServerTiming",
    "endpoints",
    "DeribitSession",
    "DeribitClient",
]
