"""Hardhat artifact loading for fundme-deploy."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import SOLIDITY_VERSION
from .exceptions import ArtifactNotFoundError
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def get_artifact_paths(
    artifacts_dir: Union[Path, str], source_name: str, contract_name: str
) -> tuple[Path, Path]:
    """
    Get artifact file paths for a contract.

    Args:
        artifacts_dir: Hardhat artifacts directory
        source_name: Source path, e.g., "contracts/FundMe.sol"
        contract_name: Contract name, e.g., "FundMe"

    Returns:
        Tuple of (artifact_path, debug_path)
    """
    contract_dir = Path(artifacts_dir) / source_name
    return (
        contract_dir / f"{contract_name}.json",
        contract_dir / f"{contract_name}.dbg.json",
    )


def _load_build_info(debug_path: Path) -> Optional[Dict[str, Any]]:
    """
    Follow a Hardhat debug file to its build info.

    Returns:
        Build info dictionary, or None if either file is missing
    """
    if not debug_path.exists():
        return None

    with open(debug_path) as f:
        debug = json.load(f)

    build_info_ref = debug.get("buildInfo")
    if not build_info_ref:
        return None

    # buildInfo is relative to the debug file's directory
    build_info_path = (debug_path.parent / build_info_ref).resolve()
    if not build_info_path.exists():
        return None

    with open(build_info_path) as f:
        return json.load(f)


def load_contract_artifact(
    artifacts_dir: Union[Path, str], source_name: str, contract_name: str
) -> ContractArtifact:
    """
    Load a compiled contract from a Hardhat artifacts directory.

    Build info (compiler version and standard JSON input) is optional: without
    it the contract can still be deployed, but not verified.

    Args:
        artifacts_dir: Hardhat artifacts directory
        source_name: Source path, e.g., "contracts/FundMe.sol"
        contract_name: Contract name, e.g., "FundMe"

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If the contract artifact file does not exist
    """
    artifact_path, debug_path = get_artifact_paths(artifacts_dir, source_name, contract_name)
    if not artifact_path.exists():
        raise ArtifactNotFoundError(
            f"Artifact for {contract_name} not found at {artifact_path}. "
            "Compile the contracts first."
        )

    with open(artifact_path) as f:
        data = json.load(f)

    artifact = ContractArtifact(
        contract_name=data.get("contractName", contract_name),
        source_name=data.get("sourceName", source_name),
        abi=data["abi"],
        bytecode=data["bytecode"],
    )

    build_info = _load_build_info(debug_path)
    if build_info is None:
        logger.warning("No build info for %s, verification will not be possible", contract_name)
        return artifact

    artifact.solc_version = build_info.get("solcVersion")
    artifact.solc_long_version = build_info.get("solcLongVersion")
    artifact.standard_json_input = build_info.get("input")

    if artifact.solc_version and artifact.solc_version != SOLIDITY_VERSION:
        logger.warning(
            "%s was compiled with solc %s, expected %s",
            contract_name,
            artifact.solc_version,
            SOLIDITY_VERSION,
        )

    return artifact
