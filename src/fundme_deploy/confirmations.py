"""Transaction inclusion and confirmation polling for fundme-deploy."""

import logging
import time
from typing import Any, Callable, Dict, Optional

from .exceptions import ConfirmationTimeoutError, DeploymentRevertedError

logger = logging.getLogger(__name__)


def _deadline(timeout: Optional[float], clock: Callable[[], float]) -> Optional[float]:
    if timeout is None:
        return None
    return clock() + timeout


def _expired(deadline: Optional[float], clock: Callable[[], float]) -> bool:
    return deadline is not None and clock() >= deadline


def wait_for_receipt(
    client: Any,
    tx_hash: str,
    timeout: Optional[float] = None,
    poll_interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Dict[str, Any]:
    """
    Block until a transaction is included in a block.

    Args:
        client: ChainClient (needs get_receipt)
        tx_hash: Transaction hash
        timeout: Seconds to wait; None waits without bound
        poll_interval: Seconds between receipt polls
        sleep: Sleep function (injected by tests)
        clock: Monotonic clock (injected by tests)

    Returns:
        Transaction receipt

    Raises:
        ConfirmationTimeoutError: If the transaction is not mined before the deadline
    """
    deadline = _deadline(timeout, clock)

    while True:
        receipt = client.get_receipt(tx_hash)
        if receipt is not None:
            return receipt

        if _expired(deadline, clock):
            raise ConfirmationTimeoutError(
                f"Transaction {tx_hash} was not mined within {timeout} seconds"
            )
        sleep(poll_interval)


def count_confirmations(head_block: int, receipt_block: int) -> int:
    """The inclusion block itself counts as the first confirmation."""
    return max(head_block - receipt_block + 1, 0)


def wait_for_confirmations(
    client: Any,
    tx_hash: str,
    receipt: Dict[str, Any],
    confirmations: int,
    timeout: Optional[float] = None,
    poll_interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Dict[str, Any]:
    """
    Block until a mined transaction has the requested confirmation depth.

    The receipt is re-read on every poll, so a transaction that is reorged
    out of the chain is detected instead of counted.

    Args:
        client: ChainClient (needs block_number and get_receipt)
        tx_hash: Transaction hash
        receipt: Receipt returned at inclusion
        confirmations: Required depth; 0 and 1 are satisfied at inclusion
        timeout: Seconds to wait; None waits without bound
        poll_interval: Seconds between polls
        sleep: Sleep function (injected by tests)
        clock: Monotonic clock (injected by tests)

    Returns:
        Latest receipt for the transaction

    Raises:
        DeploymentRevertedError: If the transaction disappears from the chain
        ConfirmationTimeoutError: If the depth is not reached before the deadline
    """
    if confirmations <= 1:
        return receipt

    deadline = _deadline(timeout, clock)

    while True:
        current = client.get_receipt(tx_hash)
        if current is None:
            raise DeploymentRevertedError(
                f"Transaction {tx_hash} was dropped from the chain while awaiting confirmations"
            )

        reached = count_confirmations(client.block_number(), current["blockNumber"])
        if reached >= confirmations:
            return current

        logger.debug("Transaction %s has %d/%d confirmations", tx_hash, reached, confirmations)

        if _expired(deadline, clock):
            raise ConfirmationTimeoutError(
                f"Transaction {tx_hash} reached {reached}/{confirmations} confirmations "
                f"within {timeout} seconds"
            )
        sleep(poll_interval)
