"""
Deribit API constants
"""

CLIENT_VERSION = "0.1.0"

PRODUCTION_BASE_URL = "https://www.deribit.com"
TESTNET_BASE_URL = "https://test.deribit.com"
API_PATH_PREFIX = "/api/v2"

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_USER_AGENT = f"deribit-http-python/{CLIENT_VERSION}"

# Token bucket, 20 requests burst with 20/s refill
DEFAULT_RATE_LIMIT_PER_SECOND = 20.0
DEFAULT_RATE_LIMIT_BURST = 20

DEFAULT_REFRESH_SAFETY_MARGIN_S = 30.0

DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BASE_DELAY_MS = 100
RETRY_JITTER = 0.25

RATE_LIMIT_BASE_BACKOFF_S = 0.5
RATE_LIMIT_MAX_BACKOFF_S = 8.0
RATE_LIMIT_WINDOW_S = 10.0

NONCE_LENGTH = 16
SIGNATURE_SCHEME = "deri-hmac-sha256"
