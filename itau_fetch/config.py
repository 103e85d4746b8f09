"""
Configuration Management Module

This module defines the configuration schema for the Itau Fetch application
using Pydantic. It handles:
1.  Loading configuration from YAML files (e.g., `config.yaml`).
2.  Overriding settings via environment variables (prefixed with `ITAU_FETCH_`).
3.  Defining default values for all settings.
4.  Providing typed configuration objects for the rest of the application.
"""

import logging
from typing import List, Optional, Dict, Any
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from .models import Account, CreditCard

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.itaulink.com.uy/trx"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
)


class Config(BaseSettings):
    """
    Global configuration for the itau-fetch application.

    Holds the bank endpoint, the session headers, the output directory and the
    list of accounts and credit cards to export. Account discovery is not done
    by this tool, so the statement sources are listed here. Settings come from:
    1.  Environment variables (prefixed with ITAU_FETCH_)
    2.  A YAML configuration file
    3.  Default values defined in this class
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the online banking backend"
    )
    transactions_path: Path = Field(
        default=Path("./transactions"),
        description="Directory where exported CSV files will be saved"
    )
    cookie: Optional[str] = Field(
        default=None,
        description="Session cookie of an already logged in browser session"
    )
    user_agent: Optional[str] = Field(
        default=None,
        description="User-Agent header sent with every request"
    )
    timeout: int = Field(
        default=30000,
        description="Request timeout in milliseconds"
    )
    debug: bool = Field(
        default=False,
        description="Enable verbose logging"
    )
    ynab: bool = Field(
        default=False,
        description="Export the YNAB Outflow/Inflow dialect instead of the plain ledger"
    )
    currencies: List[str] = Field(
        default_factory=lambda: ["Pesos", "Dolares"],
        description="Credit card currencies to export, one file per currency"
    )

    accounts: List[Account] = Field(default_factory=list)
    credit_cards: List[CreditCard] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix='ITAU_FETCH_',
        env_nested_delimiter='__',
        extra='ignore'
    )

    def request_headers(self) -> Dict[str, str]:
        """
        Headers for statement requests.

        Only the `name=value` part of the cookie is sent; attributes such as
        Path or Secure copied along with it are dropped.
        """
        headers = {}
        if self.cookie:
            headers["Cookie"] = self.cookie.split("; ")[0]
        user_agent = self.user_agent or (DEFAULT_USER_AGENT if self.cookie else None)
        if user_agent:
            headers["User-Agent"] = user_agent
        return headers

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration, optionally from a YAML file.
        """
        # Search paths for config file
        search_paths = [
            config_path,
            Path("config.yaml"),
            Path("config.yml"),
            Path.home() / ".itau_fetch" / "config.yaml",
            Path.home() / ".itau_fetch" / "config.yml",
        ]

        config_data: Dict[str, Any] = {}

        found_path = None
        for path in search_paths:
            if path and Path(path).exists() and Path(path).is_file():
                found_path = Path(path).resolve()
                break

        if found_path:
            try:
                with open(found_path, 'r') as f:
                    file_data = yaml.safe_load(f)
                if file_data:
                    # Relative output paths are relative to the config file
                    if 'transactions_path' in file_data:
                        path_val = Path(file_data['transactions_path'])
                        if not path_val.is_absolute():
                            file_data['transactions_path'] = found_path.parent / path_val
                    config_data = file_data
                logger.info(f"Loaded configuration from: {found_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Error loading config file {found_path}: {e}")
        else:
            logger.debug("No config file found. Using default configuration.")

        # Pydantic will merge init kwargs (file_data) with env vars and defaults
        return cls(**config_data)


# Global config instance
settings = Config.load()
