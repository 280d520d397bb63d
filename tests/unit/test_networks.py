"""Unit tests for the network registry."""

import pytest

from fundme_deploy.config import Settings
from fundme_deploy.constants import DEVELOPMENT_CHAINS
from fundme_deploy.exceptions import UnknownNetworkError
from fundme_deploy.networks import NetworkRegistry
from fundme_deploy.types import NetworkDescriptor


class TestResolve:
    """Test NetworkRegistry.resolve()."""

    @pytest.mark.parametrize("name", sorted(DEVELOPMENT_CHAINS))
    def test_development_networks_have_no_oracle(self, registry: NetworkRegistry, name: str):
        """Development chains resolve without an oracle address."""
        descriptor = registry.resolve(name)

        assert descriptor.is_development is True
        assert descriptor.oracle_address is None
        assert descriptor.chain_id == DEVELOPMENT_CHAINS[name]
        assert descriptor.rpc_url == "http://127.0.0.1:8545/"

    def test_public_network_returns_registered_descriptor(
        self, registry: NetworkRegistry, sepolia_descriptor: NetworkDescriptor
    ):
        """Public networks resolve to their registry entry."""
        descriptor = registry.resolve("sepolia")

        assert descriptor == sepolia_descriptor
        assert descriptor.is_development is False
        assert descriptor.oracle_address

    def test_every_public_network_has_oracle(self, registry: NetworkRegistry):
        """Every resolvable public network carries a non-empty oracle address."""
        for name in registry.names():
            descriptor = registry.resolve(name)
            if not descriptor.is_development:
                assert descriptor.oracle_address

    def test_unknown_network_raises(self, registry: NetworkRegistry):
        """Unregistered names raise UnknownNetworkError."""
        with pytest.raises(UnknownNetworkError) as exc_info:
            registry.resolve("mainnet")

        assert "mainnet" in str(exc_info.value)

    def test_unknown_network_catchable_as_value_error(self, registry: NetworkRegistry):
        with pytest.raises(ValueError):
            registry.resolve("")


class TestRegistryConstruction:
    """Test building registries."""

    def test_is_development(self, registry: NetworkRegistry):
        assert registry.is_development("hardhat")
        assert not registry.is_development("sepolia")

    def test_names_lists_development_first(self, registry: NetworkRegistry):
        names = registry.names()

        assert names[: len(DEVELOPMENT_CHAINS)] == list(DEVELOPMENT_CHAINS)
        assert "sepolia" in names

    def test_custom_development_chains(self, sepolia_descriptor: NetworkDescriptor):
        """Injected development chains replace the defaults."""
        registry = NetworkRegistry({"sepolia": sepolia_descriptor}, development_chains={"anvil": 31337})

        assert registry.resolve("anvil").is_development
        with pytest.raises(UnknownNetworkError):
            registry.resolve("hardhat")

    def test_rejects_network_both_public_and_development(self, sepolia_descriptor: NetworkDescriptor):
        with pytest.raises(ValueError):
            NetworkRegistry({"sepolia": sepolia_descriptor}, development_chains={"sepolia": 1})

    def test_from_settings_with_price_feed(self, sample_environ):
        """Settings with a price feed register the public network."""
        settings = Settings.from_env(environ=sample_environ)
        registry = NetworkRegistry.from_settings(settings)

        descriptor = registry.resolve("sepolia")
        assert descriptor.chain_id == 11155111
        assert descriptor.oracle_address == sample_environ["SEPOLIA_PRICEFEED_ADDRESS"]
        assert descriptor.rpc_url == sample_environ["SEPOLIA_RPC_URL"]
        assert descriptor.explorer_url == "https://sepolia.etherscan.io"

    def test_from_settings_without_price_feed(self, caplog):
        """A public network without a price feed cannot be resolved."""
        settings = Settings.from_env(environ={})

        with caplog.at_level("WARNING"):
            registry = NetworkRegistry.from_settings(settings)

        with pytest.raises(UnknownNetworkError):
            registry.resolve("sepolia")
        assert "SEPOLIA_PRICEFEED_ADDRESS" in caplog.text
        # Development chains still work
        assert registry.resolve("localhost").is_development
