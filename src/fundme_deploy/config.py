"""Environment-backed settings for fundme-deploy."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv
from web3 import Web3

from .constants import (
    DEFAULT_LOCAL_RPC_URL,
    DEFAULT_NETWORK,
    DEVELOPMENT_CHAINS,
    DEVELOPMENT_CONFIRMATIONS,
    FALLBACK_PRICE_FEED_ADDRESS,
    FUND_AMOUNT_ETHER,
    FUNDER_INDEX,
    NETWORK_CONFIG,
    PLACEHOLDER_PRIVATE_KEY,
    PUBLIC_CONFIRMATIONS,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DeploymentDefaults:
    """Default values the deployment flow falls back on."""

    fallback_price_feed_address: str = FALLBACK_PRICE_FEED_ADDRESS
    fund_amount_wei: int = Web3.to_wei(FUND_AMOUNT_ETHER, "ether")
    funder_index: int = FUNDER_INDEX
    development_confirmations: int = DEVELOPMENT_CONFIRMATIONS
    public_confirmations: int = PUBLIC_CONFIRMATIONS

    def confirmations_for(self, is_development: bool) -> int:
        if is_development:
            return self.development_confirmations
        return self.public_confirmations


@dataclass(frozen=True)
class Settings:
    """
    Values read from the environment (and an optional .env file).

    Missing values are kept as empty strings or the placeholder key; nothing
    is validated until a value is actually used.
    """

    network: str = DEFAULT_NETWORK
    local_rpc_url: str = DEFAULT_LOCAL_RPC_URL
    local_private_key: str = PLACEHOLDER_PRIVATE_KEY
    # Per public network: network name -> value
    rpc_urls: Mapping[str, str] = field(default_factory=dict)
    private_keys: Mapping[str, str] = field(default_factory=dict)
    price_feeds: Mapping[str, str] = field(default_factory=dict)
    etherscan_api_key: str = ""
    coinmarketcap_api_key: str = ""
    artifacts_dir: Path = Path("artifacts")
    deployments_dir: Path = Path("deployments")
    confirmation_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[Path, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: .env file to load first (defaults to python-dotenv's search)
            environ: Mapping to read instead of os.environ (no .env loading then)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If CONFIRMATION_TIMEOUT is not a number
        """
        if environ is None:
            load_dotenv(dotenv_path=env_file)
            environ = os.environ

        rpc_urls = {}
        private_keys = {}
        price_feeds = {}
        for network, network_config in NETWORK_CONFIG.items():
            rpc_urls[network] = environ.get(network_config["rpc_env"], "")
            private_keys[network] = environ.get(
                network_config["private_key_env"], PLACEHOLDER_PRIVATE_KEY
            )
            price_feeds[network] = environ.get(network_config["price_feed_env"], "")

        timeout_raw = environ.get("CONFIRMATION_TIMEOUT", "")
        confirmation_timeout = None
        if timeout_raw:
            try:
                confirmation_timeout = float(timeout_raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"CONFIRMATION_TIMEOUT must be a number of seconds, got {timeout_raw!r}"
                ) from e

        return cls(
            network=environ.get("DEPLOY_NETWORK", DEFAULT_NETWORK),
            local_rpc_url=environ.get("LOCAL_RPC_URL", DEFAULT_LOCAL_RPC_URL),
            local_private_key=environ.get(
                "LOCAL_ACCOUNT_PRIVATE_KEY", PLACEHOLDER_PRIVATE_KEY
            ),
            rpc_urls=rpc_urls,
            private_keys=private_keys,
            price_feeds=price_feeds,
            etherscan_api_key=environ.get("ETHERSCAN_API_KEY", ""),
            coinmarketcap_api_key=environ.get("COINMARKETCAP_API_KEY", ""),
            artifacts_dir=Path(environ.get("ARTIFACTS_DIR", "artifacts")),
            deployments_dir=Path(environ.get("DEPLOYMENTS_DIR", "deployments")),
            confirmation_timeout=confirmation_timeout,
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )

    def rpc_url_for(self, network: str) -> str:
        if network in DEVELOPMENT_CHAINS:
            return self.local_rpc_url
        return self.rpc_urls.get(network, "")

    def private_key_for(self, network: str) -> Optional[str]:
        """
        Get the signing key for a network.

        Returns:
            Private key, or None when unset (placeholder or empty)
        """
        if network in DEVELOPMENT_CHAINS:
            key = self.local_private_key
        else:
            key = self.private_keys.get(network, "")

        if not key or key == PLACEHOLDER_PRIVATE_KEY:
            return None
        return key
