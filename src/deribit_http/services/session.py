"""
Deribit HTTP session

The single authenticated path to the API: every endpoint wrapper ends up
in DeribitSession.call(), which threads authentication, rate limiting,
transport retry, decoding and error mapping for one request.
"""

import asyncio
import itertools
import random
from typing import Any, Callable, Dict, Iterable, Optional

from ..api.endpoints import PRIVATE_LOGOUT, PUBLIC_AUTH
from ..config.config_loader import ConfigLoader
from ..config.settings import DeribitSettings, settings as global_settings
from ..constants import RETRY_JITTER
from ..errors import (
    DeribitError,
    MissingCredentialError,
    ProtocolViolationError,
    RateLimitedError,
    RequestCancelledError,
    RequestTimeoutError,
    ResponseShapeError,
    TransportError,
    AuthFailedError,
    UnauthorizedError,
)
from ..models.auth_types import (
    ApiKeyCredentials,
    AuthState,
    AuthToken,
    BearerCredentials,
    Credentials,
    DeribitAuthResult,
)
from ..models.rpc_types import AuthMode, EndpointDescriptor, RpcResult, ServerTiming
from ..utils.clock import Clock, SystemClock
from ..utils.logging_config import get_logger
from ..utils.signature import generate_nonce
from .auth_service import AuthManager
from .rate_limiter import RateLimitGovernor
from .request_builder import RequestBuilder
from .response_decoder import REAUTH_CODES, decode_response
from .transport import HttpxTransport, Transport

logger = get_logger(__name__)

TimingHook = Callable[[str, ServerTiming], Any]


def credentials_from_settings(config: DeribitSettings) -> Optional[Credentials]:
    if config.has_credentials():
        return ApiKeyCredentials(client_id=config.client_id, client_secret=config.client_secret)
    if config.access_token:
        return BearerCredentials(token=config.access_token)
    return None


class DeribitSession:
    """
    Authenticated JSON-RPC session

    Safe to share between many tasks. Owns one transport (one connection
    pool), the auth state machine, the rate-limit governor and the
    request-id counter.
    """

    def __init__(
        self,
        settings: Optional[DeribitSettings] = None,
        *,
        credentials: Optional[Credentials] = None,
        transport: Optional[Transport] = None,
        clock: Optional[Clock] = None,
        governor: Optional[RateLimitGovernor] = None,
        rng: Optional[random.Random] = None,
        timing_hooks: Optional[Iterable[TimingHook]] = None,
        default_headers: Optional[Dict[str, str]] = None,
        nonce_factory: Callable[[], str] = generate_nonce
    ):
        self.settings = settings or global_settings
        self.base_url = self.settings.get_api_base_url()
        self.clock = clock or SystemClock()

        if credentials is None:
            credentials = credentials_from_settings(self.settings)

        self.transport: Transport = transport or HttpxTransport(
            self.base_url,
            timeout=self.settings.timeout_seconds
        )
        self.governor = governor or RateLimitGovernor(
            capacity=self.settings.rate_limit_burst,
            refill_per_second=self.settings.rate_limit_per_second,
            clock=self.clock
        )
        self.builder = RequestBuilder(
            user_agent=self.settings.user_agent,
            default_headers=default_headers,
            clock=self.clock,
            nonce_factory=nonce_factory
        )
        self.auth = AuthManager(
            credentials,
            self._exchange_token,
            clock=self.clock,
            safety_margin=self.settings.refresh_safety_margin_s,
            scope=self.settings.scope,
            grant_type=self.settings.auth_grant_type,
            nonce_factory=nonce_factory
        )

        self._ids = itertools.count(1)
        self._rng = rng or random.Random()
        self._timing_hooks = list(timing_hooks or [])
        self._closed = False

    @classmethod
    def from_account(
        cls,
        account_name: str,
        loader: Optional[ConfigLoader] = None,
        settings: Optional[DeribitSettings] = None,
        **kwargs
    ) -> "DeribitSession":
        """
        Build a session for a named account from the YAML account file

        Raises:
            MissingCredentialError: the account is unknown or disabled
        """
        loader = loader or ConfigLoader.get_instance()
        account = loader.get_account_by_name(account_name)
        if account is None:
            raise MissingCredentialError(f"Account not found: {account_name}")
        if not account.enabled:
            raise MissingCredentialError(f"Account disabled: {account_name}")

        config = settings or global_settings
        overrides: Dict[str, Any] = {}
        if account.scope:
            overrides["scope"] = account.scope
        if account.testnet is not None:
            overrides["testnet"] = account.testnet
        if overrides:
            config = config.model_copy(update=overrides)

        return cls(config, credentials=account.to_credentials(), **kwargs)

    @property
    def auth_state(self) -> AuthState:
        return self.auth.state

    @property
    def closed(self) -> bool:
        return self._closed

    def add_timing_hook(self, hook: TimingHook) -> None:
        self._timing_hooks.append(hook)

    async def __aenter__(self) -> "DeribitSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport; later calls raise RequestCancelledError"""
        if self._closed:
            return
        self._closed = True
        await self.transport.aclose()

    async def call(
        self,
        endpoint: EndpointDescriptor,
        params: Any = None,
        result_type: Any = Any,
        *,
        timeout: Optional[float] = None,
        idempotent: Optional[bool] = None
    ) -> Any:
        """
        Call one API method and return its decoded result

        Args:
            endpoint: Endpoint descriptor
            params: Pydantic model, mapping or None
            result_type: Type the result is validated as; Any returns raw JSON
            timeout: Per-attempt timeout in seconds, settings.timeout_ms when omitted
            idempotent: Override whether transport failures may be retried

        Raises:
            DeribitError: one of the error kinds in deribit_http.errors
        """
        response = await self.call_with_timing(
            endpoint,
            params,
            result_type,
            timeout=timeout,
            idempotent=idempotent
        )
        return response.result

    async def call_with_timing(
        self,
        endpoint: EndpointDescriptor,
        params: Any = None,
        result_type: Any = Any,
        *,
        timeout: Optional[float] = None,
        idempotent: Optional[bool] = None
    ) -> RpcResult:
        """Same as call() but also returns the server timing of the final attempt"""
        self._check_open(endpoint)
        if timeout is None:
            timeout = self.settings.timeout_seconds
        retry_safe = endpoint.is_idempotent if idempotent is None else idempotent

        reauthenticated = False
        transport_retries = 0

        while True:
            token: Optional[AuthToken] = None
            if endpoint.auth == AuthMode.BEARER:
                token = await self.auth.ensure_token()
            self._check_open(endpoint)

            try:
                return await self._attempt(endpoint, params, result_type, timeout, token)
            except UnauthorizedError as exc:
                if (
                    endpoint.auth != AuthMode.BEARER
                    or reauthenticated
                    or exc.code not in REAUTH_CODES
                    or not self.auth.can_reauthenticate
                ):
                    raise
                reauthenticated = True
                logger.warning(
                    "Token rejected, re-authenticating",
                    method=endpoint.method_name,
                    request_id=exc.request_id,
                    code=exc.code
                )
                self.auth.invalidate(token)
            except TransportError as exc:
                if not retry_safe or transport_retries >= self.settings.max_retries:
                    raise
                delay = self._retry_delay(transport_retries)
                transport_retries += 1
                logger.warning(
                    "Transport failure, retrying",
                    method=endpoint.method_name,
                    request_id=exc.request_id,
                    failure=exc.failure.value,
                    attempt=transport_retries,
                    delay=round(delay, 3)
                )
                await self.clock.sleep(delay)

    async def _attempt(
        self,
        endpoint: EndpointDescriptor,
        params: Any,
        result_type: Any,
        timeout: float,
        token: Optional[AuthToken]
    ) -> RpcResult:
        await self.governor.acquire()
        if self._closed:
            self.governor.release()
            self._check_open(endpoint)
        departed = False
        try:
            request_id = next(self._ids)
            request = self.builder.build(
                endpoint,
                params,
                request_id,
                bearer_token=token.access_token if token else None,
                credentials=self.auth.credentials
            )
            logger.debug(
                "Dispatching request",
                request_id=request_id,
                method=endpoint.method_name,
                verb=endpoint.http_verb.value
            )
            departed = True
            response = await asyncio.wait_for(
                self.transport.send(request, timeout=timeout),
                timeout
            )
        except asyncio.TimeoutError as exc:
            raise RequestTimeoutError(
                f"{endpoint.method_name} timed out after {timeout}s",
                request_id=request_id
            ) from exc
        except asyncio.CancelledError:
            self.governor.release()
            raise
        except DeribitError:
            if not departed:
                self.governor.release()
            raise

        try:
            result = decode_response(response, request_id, result_type)
        except RateLimitedError as exc:
            exc.retry_after = self.governor.record_rate_limited(exc.retry_after)
            raise

        self.governor.record_success()
        for hook in self._timing_hooks:
            try:
                hook(endpoint.method_name, result.timing)
            except Exception as exc:
                logger.warning(
                    "Timing hook failed",
                    method=endpoint.method_name,
                    request_id=request_id,
                    error=str(exc)
                )
        return result

    def _retry_delay(self, attempt: int) -> float:
        """Exponential backoff with +/-25% jitter"""
        base = self.settings.retry_base_delay_ms / 1000.0 * (2 ** attempt)
        jitter = base * RETRY_JITTER * (2 * self._rng.random() - 1)
        return max(0.0, base + jitter)

    def _check_open(self, endpoint: EndpointDescriptor) -> None:
        if self._closed:
            raise RequestCancelledError(f"Session closed, {endpoint.method_name} not sent")

    async def _exchange_token(self, params: Dict[str, Any]) -> DeribitAuthResult:
        """Run public/auth; server rejections surface as AuthFailedError"""
        try:
            return await self.call(PUBLIC_AUTH, params, DeribitAuthResult)
        except (TransportError, RateLimitedError, ProtocolViolationError, ResponseShapeError, RequestCancelledError):
            raise
        except DeribitError as exc:
            raise AuthFailedError(
                f"Authentication failed: {exc.message}",
                code=exc.code,
                http_status=exc.http_status,
                request_id=exc.request_id,
                data=exc.data
            ) from exc

    async def ensure_authenticated(self) -> AuthToken:
        """Authenticate now instead of on the first private call"""
        return await self.auth.ensure_token()

    def seed_token(self, token: AuthToken) -> None:
        self.auth.seed_token(token)

    async def logout(self) -> None:
        """Clear the token, revoking it server side when revoke_on_logout is set"""
        revoke = self._revoke_token if self.settings.revoke_on_logout else None
        await self.auth.logout(revoke)

    async def _revoke_token(self, access_token: str) -> None:
        if self._closed:
            logger.info("Session closed, token dropped without revocation")
            return
        token = AuthToken(access_token=access_token, issued_at=self.clock.now())
        await self._attempt(
            PRIVATE_LOGOUT,
            {"invalidate_token": True},
            Any,
            self.settings.timeout_seconds,
            token
        )
