"""
Configuration-related type definitions
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .auth_types import ApiKeyCredentials


class ApiKeyConfig(BaseModel):
    """Deribit API key account configuration"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Account name")
    description: str = Field(default="", description="Account description")
    enabled: bool = Field(default=True, description="Whether account is enabled")
    client_id: str = Field(..., alias="clientId", description="Deribit client ID")
    client_secret: str = Field(..., alias="clientSecret", repr=False, description="Deribit client secret")
    scope: Optional[str] = Field(default=None, description="OAuth scope")
    testnet: Optional[bool] = Field(default=None, description="Use the test environment for this account")

    @model_validator(mode='after')
    def validate_credentials(self):
        """Validate Deribit credentials"""
        if not self.client_id.strip() or not self.client_secret.strip():
            raise ValueError(f"Account {self.name}: clientId and clientSecret are required")
        if self.scope is not None and not self.scope.strip():
            self.scope = None
        return self

    def to_credentials(self) -> ApiKeyCredentials:
        return ApiKeyCredentials(client_id=self.client_id, client_secret=self.client_secret)


class DeribitAccountsConfig(BaseModel):
    """Account configuration file contents"""
    accounts: List[ApiKeyConfig] = Field(..., description="List of account configurations")
