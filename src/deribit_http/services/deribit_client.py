"""
Deribit client service

Main client for interacting with Deribit API, combining public and private endpoints.
"""

from typing import Optional

from ..api.deribit_private import DeribitPrivateAPI
from ..api.deribit_public import DeribitPublicAPI
from ..config.config_loader import ConfigLoader
from ..config.settings import DeribitSettings
from ..errors import DeribitError
from ..models.auth_types import Credentials
from ..utils.logging_config import get_logger
from .session import DeribitSession

logger = get_logger(__name__)


class DeribitClient(DeribitPublicAPI, DeribitPrivateAPI):
    """Main Deribit client combining public and private API functionality"""

    def __init__(
        self,
        settings: Optional[DeribitSettings] = None,
        *,
        credentials: Optional[Credentials] = None,
        session: Optional[DeribitSession] = None,
        **session_kwargs
    ):
        if session is None:
            session = DeribitSession(settings, credentials=credentials, **session_kwargs)
        self.session = session

    @classmethod
    def from_account(
        cls,
        account_name: str,
        loader: Optional[ConfigLoader] = None,
        settings: Optional[DeribitSettings] = None,
        **session_kwargs
    ) -> "DeribitClient":
        """Create a client for a named account of the YAML account file"""
        session = DeribitSession.from_account(account_name, loader=loader, settings=settings, **session_kwargs)
        return cls(session=session)

    @property
    def base_url(self) -> str:
        return self.session.base_url

    async def __aenter__(self) -> "DeribitClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self):
        """Close the underlying session and its connection pool"""
        await self.session.aclose()

    aclose = close

    async def test_connectivity(self) -> bool:
        """Test basic connectivity to Deribit API"""
        try:
            logger.info("Testing connectivity", base_url=self.base_url)
            result = await self.test()
            logger.info("Connectivity test successful", version=result.version)
            return True
        except DeribitError as error:
            logger.error(
                "Connectivity test failed",
                base_url=self.base_url,
                kind=error.kind.value,
                error=str(error)
            )
            return False
