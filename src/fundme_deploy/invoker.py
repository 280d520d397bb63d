"""Post-deploy interaction with the FundMe contract."""

import logging
import time
from typing import Callable, Optional

from .chain import DeployedContract
from .confirmations import wait_for_receipt
from .exceptions import CallRevertedError, ConfigurationError
from .types import FundingReceipt

logger = logging.getLogger(__name__)


def invoke(
    contract: DeployedContract,
    amount: int,
    caller: str,
    timeout: Optional[float] = None,
    poll_interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> FundingReceipt:
    """
    Fund the contract and wait for the transaction to be mined.

    Args:
        contract: Live contract handle
        amount: Value to send, in wei
        caller: Address the client signs with
        timeout: Seconds to wait for inclusion; None waits without bound

    Returns:
        FundingReceipt

    Raises:
        CallRevertedError: If the contract rejects the funding
        ConfigurationError: If caller is not the account the client signs with
    """
    sender = contract.client.sender
    if caller.lower() != sender.lower():
        raise ConfigurationError(f"Cannot send from {caller}, client signs as {sender}")

    tx_hash = contract.transact("fund", value=amount)
    receipt = wait_for_receipt(
        contract.client, tx_hash, timeout=timeout, poll_interval=poll_interval, sleep=sleep, clock=clock
    )
    if receipt["status"] != 1:
        raise CallRevertedError(f"fund() from {caller} reverted in transaction {tx_hash}")

    return FundingReceipt(
        transaction_hash=tx_hash,
        block_number=receipt["blockNumber"],
        value=amount,
        sender=caller,
    )


def get_funder(contract: DeployedContract, index: int) -> str:
    return contract.call("getSpecificFunder", index)


class FundStep:
    """Post-deploy step: fund the contract and read a funder back."""

    def __init__(self, amount: int, funder_index: int, timeout: Optional[float] = None):
        self.amount = amount
        self.funder_index = funder_index
        self.timeout = timeout

    def __call__(self, contract: DeployedContract, caller: str) -> FundingReceipt:
        receipt = invoke(contract, self.amount, caller, timeout=self.timeout)
        logger.info("Funded contract with: %s", receipt.value)

        funder = get_funder(contract, self.funder_index)
        logger.info("Funder address: %s", funder)
        return receipt
