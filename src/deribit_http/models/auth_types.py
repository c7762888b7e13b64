"""
Authentication-related type definitions
"""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..errors import DeribitError


# Deribit grant types
DeribitGrantType = Literal["client_credentials", "client_signature", "refresh_token"]


class ApiKeyCredentials(BaseModel):
    """API key pair, used for the OAuth2 exchange and for request signing"""
    model_config = ConfigDict(frozen=True)

    client_id: str = Field(..., description="Client ID")
    client_secret: str = Field(..., repr=False, description="Client secret")


class BearerCredentials(BaseModel):
    """Bearer token supplied by the host application, never refreshed"""
    model_config = ConfigDict(frozen=True)

    token: str = Field(..., repr=False, description="Access token")


Credentials = Union[ApiKeyCredentials, BearerCredentials]


class DeribitAuthResult(BaseModel):
    """Deribit authentication response data"""
    access_token: str = Field(..., description="Access token")
    expires_in: Optional[int] = Field(default=None, description="Token expiration time in seconds")
    refresh_token: Optional[str] = Field(default=None, description="Refresh token")
    scope: Optional[str] = Field(default=None, description="Granted scope")
    token_type: str = Field(default="bearer", description="Token type (usually 'bearer')")
    enabled_features: List[str] = Field(default_factory=list, description="List of enabled features")
    sid: Optional[str] = Field(default=None, description="Session ID")


class AuthToken(BaseModel):
    """Authentication token information"""
    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., repr=False, description="Access token")
    refresh_token: Optional[str] = Field(default=None, repr=False, description="Refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    scope: Optional[str] = Field(default=None, description="Token scope")
    issued_at: float = Field(..., description="Issue time on the session clock (seconds)")
    expires_in: Optional[float] = Field(default=None, description="Lifetime in seconds, None for no expiry")

    @classmethod
    def from_auth_result(cls, result: DeribitAuthResult, issued_at: float) -> "AuthToken":
        return cls(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            token_type=result.token_type,
            scope=result.scope,
            issued_at=issued_at,
            expires_in=result.expires_in
        )

    @property
    def expires_at(self) -> Optional[float]:
        if self.expires_in is None:
            return None
        return self.issued_at + self.expires_in

    def is_stale(self, now: float, safety_margin: float) -> bool:
        """Token should be replaced before use"""
        expires_at = self.expires_at
        return expires_at is not None and now + safety_margin >= expires_at

    def is_expired(self, now: float) -> bool:
        expires_at = self.expires_at
        return expires_at is not None and now >= expires_at


class AuthStatus(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"
    FAILED = "failed"


class AuthState(BaseModel):
    """Snapshot of the auth state machine"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: AuthStatus = Field(default=AuthStatus.UNAUTHENTICATED, description="Current state")
    token: Optional[AuthToken] = Field(default=None, description="Usable token in Authenticated/Refreshing")
    error: Optional[DeribitError] = Field(default=None, description="Failure cause in Failed")

    @classmethod
    def unauthenticated(cls) -> "AuthState":
        return cls(status=AuthStatus.UNAUTHENTICATED)

    @classmethod
    def authenticating(cls) -> "AuthState":
        return cls(status=AuthStatus.AUTHENTICATING)

    @classmethod
    def authenticated(cls, token: AuthToken) -> "AuthState":
        return cls(status=AuthStatus.AUTHENTICATED, token=token)

    @classmethod
    def refreshing(cls, token: AuthToken) -> "AuthState":
        return cls(status=AuthStatus.REFRESHING, token=token)

    @classmethod
    def failed(cls, error: DeribitError) -> "AuthState":
        return cls(status=AuthStatus.FAILED, error=error)


class DeribitBaseAuthParams(BaseModel):
    """Base authentication parameters"""
    grant_type: DeribitGrantType = Field(..., description="Grant type")
    scope: Optional[str] = Field(default=None, description="Access scope")


class DeribitClientCredentialsParams(DeribitBaseAuthParams):
    """Client credentials authentication parameters"""
    grant_type: Literal["client_credentials"] = "client_credentials"
    client_id: str = Field(..., description="Client ID")
    client_secret: str = Field(..., description="Client secret")


class DeribitClientSignatureParams(DeribitBaseAuthParams):
    """Client signature authentication parameters"""
    grant_type: Literal["client_signature"] = "client_signature"
    client_id: str = Field(..., description="Client ID")
    timestamp: int = Field(..., description="Timestamp in milliseconds")
    signature: str = Field(..., description="HMAC-SHA256 signature")
    nonce: str = Field(..., description="Random nonce")
    data: str = Field(default="", description="Optional signed data")


class DeribitRefreshTokenParams(DeribitBaseAuthParams):
    """Refresh token authentication parameters"""
    grant_type: Literal["refresh_token"] = "refresh_token"
    refresh_token: str = Field(..., description="Refresh token")
