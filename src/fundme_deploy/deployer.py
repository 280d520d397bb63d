"""Contract deployment for fundme-deploy."""

import logging
import time
from typing import Any, Callable, Optional, Tuple

from web3 import Web3

from .chain import DeployedContract
from .config import DeploymentDefaults
from .confirmations import wait_for_confirmations, wait_for_receipt
from .exceptions import (
    ConfirmationTimeoutError,
    ConstructorArgumentsError,
    DeploymentRevertedError,
)
from .types import ContractArtifact, DeploymentParameters, DeploymentResult, NetworkDescriptor

logger = logging.getLogger(__name__)


def build_parameters(
    descriptor: NetworkDescriptor, defaults: DeploymentDefaults
) -> DeploymentParameters:
    """
    Build deployment parameters for a resolved network.

    The oracle address is passed through as-is; on development chains it is
    None and the Deployer substitutes the fallback.
    """
    return DeploymentParameters(
        constructor_args=(descriptor.oracle_address,),
        confirmations_required=defaults.confirmations_for(descriptor.is_development),
    )


class Deployer:
    """Deploys a compiled contract and waits until the creation is durable."""

    def __init__(
        self,
        client: Any,
        artifact: ContractArtifact,
        network: str = "",
        timeout: Optional[float] = None,
        poll_interval: float = 1.0,
        confirmation_attempts: int = 1,
        backoff: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the deployer.

        Args:
            client: ChainClient used to submit and poll
            artifact: Compiled contract to deploy
            network: Network name recorded on results
            timeout: Deadline in seconds for each wait; None waits without bound
            poll_interval: Seconds between polls
            confirmation_attempts: How many times a timed-out confirmation wait
                                   is restarted (the creation is never resubmitted)
            backoff: Multiplier for the pause between confirmation attempts
            sleep: Sleep function (injected by tests)
            clock: Monotonic clock (injected by tests)
        """
        if confirmation_attempts < 1:
            raise ValueError("confirmation_attempts must be >= 1")

        self.client = client
        self.artifact = artifact
        self.network = network
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.confirmation_attempts = confirmation_attempts
        self.backoff = backoff
        self._sleep = sleep
        self._clock = clock

    def _resolve_args(
        self, parameters: DeploymentParameters, fallback_oracle_address: str
    ) -> Tuple[Any, ...]:
        args = []
        for position, value in enumerate(parameters.constructor_args):
            if value is None or value == "":
                logger.warning(
                    "No price feed address for constructor argument %d, "
                    "using fallback %s",
                    position,
                    fallback_oracle_address,
                )
                value = fallback_oracle_address
            args.append(value)

        expected = len(self.artifact.constructor_inputs)
        if len(args) != expected:
            raise ConstructorArgumentsError(
                f"{self.artifact.contract_name} constructor takes {expected} "
                f"argument(s), got {len(args)}"
            )
        return tuple(args)

    def _wait_once(self, tx_hash: str, receipt: Any, confirmations: int) -> Any:
        return wait_for_confirmations(
            self.client,
            tx_hash,
            receipt,
            confirmations,
            timeout=self.timeout,
            poll_interval=self.poll_interval,
            sleep=self._sleep,
            clock=self._clock,
        )

    def _await_confirmations(
        self, tx_hash: str, receipt: Any, confirmations: int
    ) -> Any:
        # The last attempt runs outside the loop so its timeout propagates
        for attempt in range(1, self.confirmation_attempts):
            try:
                return self._wait_once(tx_hash, receipt, confirmations)
            except ConfirmationTimeoutError:
                delay = self.poll_interval * self.backoff**attempt
                logger.warning(
                    "Confirmation wait for %s timed out (attempt %d/%d), retrying in %.1fs",
                    tx_hash,
                    attempt,
                    self.confirmation_attempts,
                    delay,
                )
                self._sleep(delay)

        return self._wait_once(tx_hash, receipt, confirmations)

    def deploy(
        self, parameters: DeploymentParameters, fallback_oracle_address: str
    ) -> Tuple[DeploymentResult, DeployedContract]:
        """
        Deploy the contract and wait for the required confirmations.

        Args:
            parameters: Constructor arguments and confirmation depth
            fallback_oracle_address: Substituted for absent constructor arguments

        Returns:
            Tuple of (result, contract) where:
            - result: DeploymentResult with the arguments exactly as submitted
            - contract: Live DeployedContract handle

        Raises:
            ConstructorArgumentsError: If argument count does not match the ABI
            DeploymentRevertedError: If creation reverts or is dropped
            ConfirmationTimeoutError: If the deadline passes before confirmation
        """
        args = self._resolve_args(parameters, fallback_oracle_address)

        tx_hash = self.client.deploy_contract(self.artifact.abi, self.artifact.bytecode, args)
        logger.info("Deployment transaction sent: %s", tx_hash)

        receipt = wait_for_receipt(
            self.client,
            tx_hash,
            timeout=self.timeout,
            poll_interval=self.poll_interval,
            sleep=self._sleep,
            clock=self._clock,
        )
        if receipt["status"] != 1:
            raise DeploymentRevertedError(
                f"Contract creation {tx_hash} reverted in block {receipt['blockNumber']}"
            )
        if not receipt.get("contractAddress"):
            raise DeploymentRevertedError(
                f"Transaction {tx_hash} did not create a contract"
            )

        if parameters.confirmations_required > 1:
            logger.info(
                "Waiting for %d confirmations of %s",
                parameters.confirmations_required,
                tx_hash,
            )
        receipt = self._await_confirmations(tx_hash, receipt, parameters.confirmations_required)

        address = Web3.to_checksum_address(receipt["contractAddress"])
        result = DeploymentResult(
            contract_address=address,
            deployment_tx_hash=tx_hash,
            block_number=receipt["blockNumber"],
            constructor_args=args,
            network=self.network,
        )
        return result, DeployedContract(address=address, abi=self.artifact.abi, client=self.client)
