"""Command-line entry point for fundme-deploy."""

import logging
from typing import Optional

from .artifacts import load_contract_artifact
from .chain import ChainClient
from .config import DeploymentDefaults, Settings
from .constants import CONTRACT_NAME, CONTRACT_SOURCE
from .invoker import FundStep
from .networks import NetworkRegistry
from .verifier import EtherscanClient, Verifier
from .workflow import run_deployment

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main(settings: Optional[Settings] = None) -> int:
    """
    Deploy FundMe to the network named by DEPLOY_NETWORK.

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    if settings is None:
        try:
            settings = Settings.from_env()
        except ValueError:
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            logger.exception("Invalid configuration")
            return 1

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error("Unknown LOG_LEVEL %r", settings.log_level)
        return 1

    logging.basicConfig(level=level, format=LOG_FORMAT)

    network = settings.network
    try:
        registry = NetworkRegistry.from_settings(settings)
        descriptor = registry.resolve(network)

        client = ChainClient.connect(descriptor.rpc_url or "", settings.private_key_for(network))
        artifact = load_contract_artifact(settings.artifacts_dir, CONTRACT_SOURCE, CONTRACT_NAME)

        verifier = None
        if not descriptor.is_development and descriptor.explorer_api_url:
            if settings.etherscan_api_key:
                explorer = EtherscanClient(
                    descriptor.explorer_api_url, settings.etherscan_api_key, descriptor.chain_id
                )
                verifier = Verifier(explorer, artifact)
            else:
                logger.warning("ETHERSCAN_API_KEY is not set, verification disabled")

        defaults = DeploymentDefaults()
        fund = FundStep(
            defaults.fund_amount_wei, defaults.funder_index, timeout=settings.confirmation_timeout
        )

        run_deployment(
            network,
            registry,
            client,
            artifact,
            defaults=defaults,
            verifier=verifier,
            post_deploy=[fund],
            records_root=settings.deployments_dir,
            deployer_options={"timeout": settings.confirmation_timeout},
        )
    except Exception:
        logger.exception("Deployment of %s to %s failed", CONTRACT_NAME, network)
        return 1

    return 0
