"""Deployment record persistence for fundme-deploy."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import DeploymentError
from .types import DeploymentResult, VerificationOutcome


def get_default_records_dir() -> Path:
    """
    Get default records directory.

    Returns:
        Path to ./deployments
    """
    return Path.cwd() / "deployments"


def get_record_path(
    network: str,
    contract_name: str,
    records_root: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Get the record file path for a contract on a network.

    Args:
        network: Network name
        contract_name: Contract name, e.g., "FundMe"
        records_root: Custom records directory (defaults to ./deployments)

    Returns:
        Path to {records_root}/{network}/{contract_name}.json
    """
    if records_root is None:
        records_root = get_default_records_dir()
    else:
        records_root = Path(records_root).absolute()

    return records_root / network / f"{contract_name}.json"


def _verification_entry(outcome: VerificationOutcome) -> Dict[str, Any]:
    return {"status": outcome.status.value, "reason": outcome.reason}


def save_deployment_record(
    result: DeploymentResult,
    record_path: Path,
    verification: Optional[VerificationOutcome] = None,
) -> None:
    """
    Save a deployment result to disk.

    Args:
        result: Confirmed deployment
        record_path: Destination JSON file
        verification: Verification outcome, if one is already known

    Creates parent directories if they don't exist.
    """
    record: Dict[str, Any] = {
        "address": result.contract_address,
        "transaction_hash": result.deployment_tx_hash,
        "block": result.block_number,
        "constructor_args": list(result.constructor_args),
        "network": result.network,
        "recorded_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        "verification": None,
    }
    if verification is not None:
        record["verification"] = _verification_entry(verification)

    record_path.parent.mkdir(parents=True, exist_ok=True)
    with open(record_path, "w") as f:
        json.dump(record, f, indent=2)


def load_deployment_record(record_path: Path) -> DeploymentResult:
    """
    Load a deployment result from disk.

    Raises:
        DeploymentError: If the record is missing or malformed
    """
    try:
        with open(record_path) as f:
            record = json.load(f)
    except FileNotFoundError as e:
        raise DeploymentError(f"Deployment record not found at {record_path}") from e
    except json.JSONDecodeError as e:
        raise DeploymentError(f"Deployment record at {record_path} is corrupted") from e

    try:
        return DeploymentResult(
            contract_address=record["address"],
            deployment_tx_hash=record["transaction_hash"],
            block_number=record["block"],
            constructor_args=tuple(record["constructor_args"]),
            network=record["network"],
        )
    except KeyError as e:
        raise DeploymentError(f"Deployment record at {record_path} is missing {e}") from e


def update_verification_status(record_path: Path, outcome: VerificationOutcome) -> None:
    """Store a verification outcome in an existing record."""
    with open(record_path) as f:
        record = json.load(f)

    record["verification"] = _verification_entry(outcome)

    with open(record_path, "w") as f:
        json.dump(record, f, indent=2)
