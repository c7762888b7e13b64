"""
Deribit authentication service

Handles the OAuth 2.0 token exchange, token refresh and the auth state
machine of a session. Concurrent callers that find the token missing or
stale share one in-flight exchange.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

from ..constants import DEFAULT_REFRESH_SAFETY_MARGIN_S
from ..errors import DeribitError, MissingCredentialError
from ..models.auth_types import (
    ApiKeyCredentials,
    AuthState,
    AuthStatus,
    AuthToken,
    BearerCredentials,
    Credentials,
    DeribitAuthResult,
    DeribitClientCredentialsParams,
    DeribitClientSignatureParams,
    DeribitGrantType,
    DeribitRefreshTokenParams,
)
from ..utils.clock import Clock, SystemClock
from ..utils.logging_config import get_logger
from ..utils.signature import client_signature, generate_nonce

logger = get_logger(__name__)

TokenExchange = Callable[[Dict[str, Any]], Awaitable[DeribitAuthResult]]
TokenRevoke = Callable[[str], Awaitable[Any]]


def _retrieve_exception(future: "asyncio.Future[AuthToken]") -> None:
    # the initiator may have been cancelled; keep the failure from being reported as unretrieved
    if not future.cancelled():
        future.exception()


class AuthManager:
    """
    Auth state machine for one session

    States: Unauthenticated, Authenticating, Authenticated(t),
    Refreshing(t), Failed(e). The lock is held only while reading or
    switching state; the exchange itself runs in a shielded task so a
    cancelled initiator does not abort it for the other waiters.
    """

    def __init__(
        self,
        credentials: Optional[Credentials],
        exchange: TokenExchange,
        clock: Optional[Clock] = None,
        safety_margin: float = DEFAULT_REFRESH_SAFETY_MARGIN_S,
        scope: Optional[str] = None,
        grant_type: DeribitGrantType = "client_credentials",
        nonce_factory: Callable[[], str] = generate_nonce
    ):
        if grant_type == "refresh_token":
            raise ValueError("refresh_token is not an initial grant type")
        self._credentials = credentials
        self._exchange = exchange
        self.clock = clock or SystemClock()
        self.safety_margin = safety_margin
        self.scope = scope
        self.grant_type = grant_type
        self.nonce_factory = nonce_factory

        self._lock = asyncio.Lock()
        self._flight: Optional["asyncio.Future[AuthToken]"] = None
        self._generation = 0

        if isinstance(credentials, BearerCredentials):
            self._state = AuthState.authenticated(
                AuthToken(access_token=credentials.token, issued_at=self.clock.now())
            )
        else:
            self._state = AuthState.unauthenticated()

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    @property
    def can_reauthenticate(self) -> bool:
        return isinstance(self._credentials, ApiKeyCredentials)

    def _credential_params(self, credentials: ApiKeyCredentials) -> Dict[str, Any]:
        if self.grant_type == "client_signature":
            timestamp = self.clock.time_ms()
            nonce = self.nonce_factory()
            params: Any = DeribitClientSignatureParams(
                client_id=credentials.client_id,
                timestamp=timestamp,
                nonce=nonce,
                data="",
                signature=client_signature(credentials.client_secret, timestamp, nonce, ""),
                scope=self.scope
            )
        else:
            params = DeribitClientCredentialsParams(
                client_id=credentials.client_id,
                client_secret=credentials.client_secret,
                scope=self.scope
            )
        return params.model_dump(exclude_none=True)

    async def ensure_token(self) -> AuthToken:
        """
        Return a usable token, authenticating or refreshing first if needed

        Raises:
            MissingCredentialError: the session has no credentials
            AuthFailedError: the exchange was rejected
            TransportError: the exchange could not reach the server
        """
        async with self._lock:
            credentials = self._credentials
            state = self._state
            now = self.clock.now()

            if credentials is None:
                raise MissingCredentialError("No credentials configured for authenticated endpoint")

            if isinstance(credentials, BearerCredentials):
                return state.token

            if (
                state.status == AuthStatus.AUTHENTICATED
                and not state.token.is_stale(now, self.safety_margin)
            ):
                return state.token

            if self._flight is not None:
                flight = self._flight
                initiator = False
            else:
                flight = self._start_flight(credentials, state)
                initiator = True

        try:
            return await asyncio.shield(flight)
        except DeribitError:
            if initiator:
                raise
            # refresh failed but the previous token is still valid
            state = self._state
            if (
                state.status == AuthStatus.AUTHENTICATED
                and not state.token.is_expired(self.clock.now())
            ):
                return state.token
            raise

    def _start_flight(self, credentials: ApiKeyCredentials, state: AuthState) -> "asyncio.Future[AuthToken]":
        previous: Optional[AuthToken] = None
        if state.status == AuthStatus.AUTHENTICATED and state.token.refresh_token:
            previous = state.token
            params: Dict[str, Any] = DeribitRefreshTokenParams(
                refresh_token=state.token.refresh_token
            ).model_dump(exclude_none=True)
            self._state = AuthState.refreshing(state.token)
        else:
            params = self._credential_params(credentials)
            self._state = AuthState.authenticating()

        logger.info("Requesting access token", grant_type=params["grant_type"])

        flight = asyncio.ensure_future(self._run_flight(params, previous, self._generation))
        flight.add_done_callback(_retrieve_exception)
        self._flight = flight
        return flight

    async def _run_flight(
        self,
        params: Dict[str, Any],
        previous: Optional[AuthToken],
        generation: int
    ) -> AuthToken:
        issued_at = self.clock.now()
        try:
            result = await self._exchange(params)
        except BaseException as exc:
            self._finish_failed_flight(exc, previous, generation)
            raise

        token = AuthToken.from_auth_result(result, issued_at)
        if generation == self._generation:
            self._state = AuthState.authenticated(token)
            self._flight = None
        logger.info(
            "Access token obtained",
            grant_type=params["grant_type"],
            expires_in=token.expires_in,
            scope=token.scope
        )
        return token

    def _finish_failed_flight(
        self,
        exc: BaseException,
        previous: Optional[AuthToken],
        generation: int
    ) -> None:
        if generation != self._generation:
            return
        self._flight = None
        if previous is not None and not previous.is_expired(self.clock.now()):
            self._state = AuthState.authenticated(previous)
        elif isinstance(exc, DeribitError):
            self._state = AuthState.failed(exc)
        else:
            self._state = AuthState.unauthenticated()
        logger.warning(
            "Token exchange failed",
            error=str(exc),
            state=self._state.status.value
        )

    def seed_token(self, token: AuthToken) -> None:
        """Install a token obtained elsewhere"""
        self._generation += 1
        self._flight = None
        self._state = AuthState.authenticated(token)

    def invalidate(self, token: Optional[AuthToken] = None) -> None:
        """
        Drop the current token after the server rejected it

        Args:
            token: The rejected token; a newer token is left alone
        """
        state = self._state
        if state.status != AuthStatus.AUTHENTICATED:
            return
        if token is not None and state.token.access_token != token.access_token:
            return
        if not self.can_reauthenticate:
            return
        self._state = AuthState.unauthenticated()

    async def logout(self, revoke: Optional[TokenRevoke] = None) -> None:
        """
        Clear the token and forget host supplied bearer credentials

        Args:
            revoke: Called with the access token to revoke it server side
        """
        async with self._lock:
            token = self._state.token
            self._generation += 1
            self._flight = None
            self._state = AuthState.unauthenticated()
            if isinstance(self._credentials, BearerCredentials):
                self._credentials = None

        logger.info("Logged out", revoked=bool(revoke and token))
        if revoke is not None and token is not None:
            await revoke(token.access_token)
