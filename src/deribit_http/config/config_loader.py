"""
Configuration loader for YAML-based API key configuration

Provides shared access to named Deribit accounts.
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml

from ..models.auth_types import ApiKeyCredentials
from ..models.config_types import ApiKeyConfig, DeribitAccountsConfig
from .settings import settings


class ConfigLoader:
    """Loader for the YAML account file"""

    _instance: Optional['ConfigLoader'] = None

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self._config_path = Path(config_path) if config_path else None
        self._config: Optional[DeribitAccountsConfig] = None

    @classmethod
    def get_instance(cls) -> 'ConfigLoader':
        """Get the shared ConfigLoader"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def _resolve_path(self, config_path: Optional[Union[str, Path]]) -> Path:
        if config_path:
            return Path(config_path)
        if self._config_path:
            return self._config_path
        if settings.api_key_file:
            return Path(settings.api_key_file)
        raise FileNotFoundError("No account file configured (set DERIBIT_API_KEY_FILE)")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> DeribitAccountsConfig:
        """
        Load account configuration from YAML file

        Args:
            config_path: File to read; an explicit path always re-reads and
                becomes the loader's path

        Raises:
            FileNotFoundError: the file does not exist
            yaml.YAMLError: the file is not valid YAML
            ValueError: the file defines no accounts
        """
        if config_path is None and self._config is not None:
            return self._config

        path = self._resolve_path(config_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r', encoding='utf-8') as file:
            config_data = yaml.safe_load(file)

        if not config_data or not config_data.get('accounts'):
            raise ValueError("Invalid configuration: No accounts found")

        self._config = DeribitAccountsConfig.model_validate(config_data)
        self._config_path = path
        return self._config

    def reload_config(self) -> DeribitAccountsConfig:
        """Drop the cached configuration and read the file again"""
        self._config = None
        return self.load_config()

    def get_enabled_accounts(self) -> List[ApiKeyConfig]:
        """Get all enabled accounts"""
        config = self.load_config()
        return [account for account in config.accounts if account.enabled]

    def get_account_by_name(self, name: str) -> Optional[ApiKeyConfig]:
        """Get account configuration by name"""
        config = self.load_config()
        for account in config.accounts:
            if account.name == name:
                return account
        return None

    def credentials_for(self, name: str) -> Optional[ApiKeyCredentials]:
        """Credentials of an enabled account, None if unknown or disabled"""
        account = self.get_account_by_name(name)
        if not account or not account.enabled:
            return None
        return account.to_credentials()
