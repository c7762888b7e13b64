"""
Deribit request signing (deri-hmac-sha256)
"""

import hashlib
import hmac
import secrets
import string

from ..constants import NONCE_LENGTH, SIGNATURE_SCHEME

_NONCE_ALPHABET = string.ascii_letters + string.digits


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Random alphanumeric nonce"""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(length))


def signature_payload(timestamp: int, nonce: str, verb: str, path: str, data: str) -> str:
    """
    Canonical string signed for a request

    Args:
        timestamp: Milliseconds since the epoch
        nonce: Random nonce
        verb: HTTP verb
        path: Request path including /api/v2
        data: Query string for GET, JSON body for POST
    """
    return f"{timestamp}\n{nonce}\n{verb.upper()}\n{path}\n{data}\n"


def hmac_sha256_hex(secret: str, payload: str) -> str:
    return hmac.new(
        secret.encode('utf-8'),
        payload.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


def sign_request(client_secret: str, timestamp: int, nonce: str, verb: str, path: str, data: str) -> str:
    """Hex HMAC-SHA256 of the canonical request string"""
    return hmac_sha256_hex(client_secret, signature_payload(timestamp, nonce, verb, path, data))


def format_authorization_header(client_id: str, timestamp: int, signature: str, nonce: str) -> str:
    return f"{SIGNATURE_SCHEME} id={client_id},ts={timestamp},sig={signature},nonce={nonce}"


def client_signature(client_secret: str, timestamp: int, nonce: str, data: str = "") -> str:
    """Signature for public/auth with grant_type=client_signature"""
    return hmac_sha256_hex(client_secret, f"{timestamp}\n{nonce}\n{data}")


def verify_signature(expected: str, actual: str) -> bool:
    return hmac.compare_digest(expected, actual)
