"""Deployment orchestration for fundme-deploy."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .chain import DeployedContract
from .config import DeploymentDefaults
from .deployer import Deployer, build_parameters
from .networks import NetworkRegistry
from .records import (
    get_record_path,
    load_deployment_record,
    save_deployment_record,
    update_verification_status,
)
from .types import ContractArtifact, DeploymentReport, VerificationOutcome
from .verifier import Verifier

logger = logging.getLogger(__name__)

# A post-deploy step receives the live contract and the sending address
PostDeployStep = Callable[[DeployedContract, str], Any]


def run_deployment(
    network_name: str,
    registry: NetworkRegistry,
    client: Any,
    artifact: ContractArtifact,
    defaults: Optional[DeploymentDefaults] = None,
    verifier: Optional[Verifier] = None,
    post_deploy: Sequence[PostDeployStep] = (),
    records_root: Optional[Union[Path, str]] = None,
    deployer_options: Optional[Dict[str, Any]] = None,
) -> DeploymentReport:
    """
    Deploy, persist, verify and exercise the contract on one network.

    Steps run strictly in order; each consumes the previous step's result.
    Verification only runs on public networks and never fails the run.

    Args:
        network_name: Network to deploy to
        registry: Network registry built at startup
        client: ChainClient connected to that network
        artifact: Compiled contract
        defaults: Fallback values (defaults to DeploymentDefaults())
        verifier: Source verifier, or None to skip verification
        post_deploy: Steps run against the deployed contract
        records_root: Where to persist the deployment record (defaults to ./deployments)
        deployer_options: Extra keyword arguments for Deployer (timeout, poll_interval, ...)

    Returns:
        DeploymentReport

    Raises:
        UnknownNetworkError: If network_name cannot be resolved (nothing is deployed)
        DeploymentError: If deployment or a post-deploy step fails
    """
    if defaults is None:
        defaults = DeploymentDefaults()

    descriptor = registry.resolve(network_name)
    parameters = build_parameters(descriptor, defaults)

    logger.info(
        "Deploying %s contract with the account: %s", artifact.contract_name, client.sender
    )
    deployer = Deployer(client, artifact, network=descriptor.name, **(deployer_options or {}))
    result, contract = deployer.deploy(parameters, defaults.fallback_price_feed_address)
    logger.info("%s deployed to: %s", artifact.contract_name, result.contract_address)

    # Persist before verification so an interrupted run can be resumed
    record_path = get_record_path(descriptor.name, artifact.contract_name, records_root)
    save_deployment_record(result, record_path)

    report = DeploymentReport(network=descriptor, result=result, record_path=str(record_path))

    if descriptor.is_development:
        logger.info("Skipping verification on development network %s", descriptor.name)
    elif verifier is None:
        logger.info("No verifier configured, skipping verification")
    else:
        report.verification = verifier.verify(result.contract_address, result.constructor_args)
        update_verification_status(record_path, report.verification)

    for step in post_deploy:
        report.post_deploy.append(step(contract, client.sender))

    return report


def resume_verification(record_path: Union[Path, str], verifier: Verifier) -> VerificationOutcome:
    """
    Verify a deployment from its persisted record.

    Args:
        record_path: Record written by run_deployment
        verifier: Source verifier

    Returns:
        VerificationOutcome (also written back to the record)
    """
    record_path = Path(record_path)
    result = load_deployment_record(record_path)
    outcome = verifier.verify(result.contract_address, result.constructor_args)
    update_verification_status(record_path, outcome)
    return outcome
