"""Network registry for fundme-deploy."""

import logging
from typing import Dict, List, Mapping, Optional

from .config import Settings
from .constants import DEVELOPMENT_CHAINS, NETWORK_CONFIG
from .exceptions import UnknownNetworkError
from .types import NetworkDescriptor

logger = logging.getLogger(__name__)


class NetworkRegistry:
    """Maps network names to their deployment descriptors."""

    def __init__(
        self,
        public_networks: Mapping[str, NetworkDescriptor],
        development_chains: Optional[Mapping[str, int]] = None,
        local_rpc_url: Optional[str] = None,
    ):
        """
        Initialize the registry.

        Args:
            public_networks: Maps public network name -> descriptor
            development_chains: Maps development network name -> chain id
                                (defaults to DEVELOPMENT_CHAINS)
            local_rpc_url: RPC URL reported for development networks
        """
        if development_chains is None:
            development_chains = DEVELOPMENT_CHAINS

        overlap = set(public_networks) & set(development_chains)
        if overlap:
            raise ValueError(
                f"Networks cannot be both public and development: {sorted(overlap)}"
            )

        self._public: Dict[str, NetworkDescriptor] = dict(public_networks)
        self._development: Dict[str, int] = dict(development_chains)
        self._local_rpc_url = local_rpc_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "NetworkRegistry":
        """
        Build the registry from NETWORK_CONFIG and loaded settings.

        A public network without a configured price feed is left out, so
        resolving it fails instead of deploying against no oracle.
        """
        public: Dict[str, NetworkDescriptor] = {}
        for name, network_config in NETWORK_CONFIG.items():
            price_feed = settings.price_feeds.get(name, "")
            if not price_feed:
                logger.warning(
                    "No price feed configured for %s (%s unset), network disabled",
                    name,
                    network_config["price_feed_env"],
                )
                continue

            public[name] = NetworkDescriptor(
                name=name,
                is_development=False,
                chain_id=network_config["chain_id"],
                oracle_address=price_feed,
                rpc_url=settings.rpc_url_for(name),
                explorer_url=network_config["block_explorer_url"],
                explorer_api_url=network_config["explorer_api_url"],
            )

        return cls(public, local_rpc_url=settings.local_rpc_url)

    def is_development(self, network: str) -> bool:
        return network in self._development

    def names(self) -> List[str]:
        """Get all resolvable network names, development chains first."""
        return list(self._development) + sorted(self._public)

    def resolve(self, network: str) -> NetworkDescriptor:
        """
        Resolve a network name to its descriptor.

        Args:
            network: Network name (e.g., "localhost", "sepolia")

        Returns:
            NetworkDescriptor; development chains carry no oracle address

        Raises:
            UnknownNetworkError: If network is neither development nor registered
        """
        if network in self._development:
            return NetworkDescriptor(
                name=network,
                is_development=True,
                chain_id=self._development[network],
                rpc_url=self._local_rpc_url,
            )

        if network not in self._public:
            raise UnknownNetworkError(
                f"Network '{network}' is not configured. "
                f"Known networks: {', '.join(self.names())}"
            )

        return self._public[network]
