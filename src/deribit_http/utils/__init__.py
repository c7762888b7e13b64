"""
Utility module for the Deribit HTTP client

Provides the clock capability, request signing helpers and logging setup.
"""

from .clock import Clock, SystemClock, ManualClock
from .signature import (
    generate_nonce,
    signature_payload,
    sign_request,
    format_authorization_header,
    client_signature,
    verify_signature
)
from .logging_config import setup_logging, get_logger

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "ManualClock",

    # Signing
    "generate_nonce",
    "signature_payload",
    "sign_request",
    "format_authorization_header",
    "client_signature",
    "verify_signature",

    # Logging
    "setup_logging",
    "get_logger",
]
