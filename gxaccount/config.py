"""
GXAccount SDK - Configuration Management

Handles loading faucet and node endpoints per environment.
Contains no private keys; signing keys live in providers.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_ADDRESS_PREFIX,
    DEFAULT_DEV_FAUCET_URL,
    DEFAULT_FAUCET_URL,
    DEFAULT_RPC_URL,
    DEFAULT_TIMEOUT,
    HTTPS_PROTOCOLS,
    PRODUCTION,
)
from .errors import InvalidConfigError, MissingConfigError


@dataclass
class EnvironmentConfig:
    """Faucet endpoint and registration referrer for one environment."""
    faucet_url: str
    referrer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, section: str) -> "EnvironmentConfig":
        if not isinstance(data, dict) or not data.get("faucet_url"):
            raise MissingConfigError(
                f"Config section '{section}' must define faucet_url",
                {"section": section}
            )
        return cls(faucet_url=data["faucet_url"], referrer=data.get("referrer"))


@dataclass
class FaucetConfig:
    """
    Endpoints for production and development.

    Every environment name other than "production" selects the
    development endpoints.
    """
    production: EnvironmentConfig = field(
        default_factory=lambda: EnvironmentConfig(DEFAULT_FAUCET_URL)
    )
    development: EnvironmentConfig = field(
        default_factory=lambda: EnvironmentConfig(DEFAULT_DEV_FAUCET_URL)
    )
    rpc_url: str = DEFAULT_RPC_URL
    address_prefix: str = DEFAULT_ADDRESS_PREFIX
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.timeout <= 0:
            raise InvalidConfigError("timeout must be positive", {"timeout": self.timeout})

    def environment(self, env: Optional[str]) -> EnvironmentConfig:
        return self.production if env == PRODUCTION else self.development

    def faucet_url(self, env: Optional[str], protocol: Optional[str] = None) -> str:
        """
        Faucet URL for an environment.

        Args:
            env: "production" or anything else for development.
            protocol: Page protocol of the caller; "https:" upgrades
                http:// URLs so requests are not blocked as mixed content.
        """
        url = self.environment(env).faucet_url
        if protocol in HTTPS_PROTOCOLS:
            url = url.replace("http://", "https://", 1)
        return url

    def referrer(self, env: Optional[str]) -> Optional[str]:
        return self.environment(env).referrer

    @classmethod
    def from_file(cls, path: str) -> "FaucetConfig":
        """
        Load configuration from a JSON file.

        Example config.json:
        {
            "build": {"faucet_url": "https://...", "referrer": "gxb-faucet"},
            "dev": {"faucet_url": "http://...", "referrer": "nathan"},
            "rpc_url": "https://node1.gxb.io",
            "address_prefix": "GXC"
        }
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(config_path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidConfigError(f"Config file is not valid JSON: {path}") from e

        for section in ("build", "dev"):
            if section not in data:
                raise MissingConfigError(
                    f"Config file is missing section '{section}'",
                    {"path": path}
                )

        try:
            timeout = int(data.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(
                f"Config timeout must be an integer: {data.get('timeout')!r}",
                {"path": path}
            ) from e

        return cls(
            production=EnvironmentConfig.from_dict(data["build"], "build"),
            development=EnvironmentConfig.from_dict(data["dev"], "dev"),
            rpc_url=data.get("rpc_url", DEFAULT_RPC_URL),
            address_prefix=data.get("address_prefix", DEFAULT_ADDRESS_PREFIX),
            timeout=timeout
        )

    @classmethod
    def from_env(cls) -> "FaucetConfig":
        """Load configuration from GXACCOUNT_* environment variables."""
        try:
            timeout = int(os.environ.get("GXACCOUNT_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError as e:
            raise InvalidConfigError("GXACCOUNT_TIMEOUT must be an integer") from e

        return cls(
            production=EnvironmentConfig(
                faucet_url=os.environ.get("GXACCOUNT_FAUCET_URL", DEFAULT_FAUCET_URL),
                referrer=os.environ.get("GXACCOUNT_REFERRER")
            ),
            development=EnvironmentConfig(
                faucet_url=os.environ.get("GXACCOUNT_DEV_FAUCET_URL", DEFAULT_DEV_FAUCET_URL),
                referrer=os.environ.get("GXACCOUNT_DEV_REFERRER")
            ),
            rpc_url=os.environ.get("GXACCOUNT_RPC_URL", DEFAULT_RPC_URL),
            address_prefix=os.environ.get("GXACCOUNT_ADDRESS_PREFIX", DEFAULT_ADDRESS_PREFIX),
            timeout=timeout
        )
