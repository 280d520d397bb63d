"""Data types and dataclasses for fundme-deploy."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NetworkDescriptor:
    """Resolved description of the network a deployment targets."""

    name: str  # e.g., "sepolia" or "localhost"
    is_development: bool
    chain_id: int
    oracle_address: Optional[str] = None  # Price feed, None on development chains

    rpc_url: Optional[str] = None
    explorer_url: Optional[str] = None  # e.g., "https://sepolia.etherscan.io"
    explorer_api_url: Optional[str] = None


@dataclass(frozen=True)
class DeploymentParameters:
    """Constructor arguments and confirmation depth for one deployment run."""

    constructor_args: Tuple[Any, ...]
    confirmations_required: int

    def __post_init__(self) -> None:
        if self.confirmations_required < 0:
            raise ValueError(
                f"confirmations_required must be >= 0, got {self.confirmations_required}"
            )
        # Freeze list input so the arguments cannot change after construction
        object.__setattr__(self, "constructor_args", tuple(self.constructor_args))


@dataclass(frozen=True)
class DeploymentResult:
    """A contract creation that reached its required confirmation depth."""

    contract_address: str  # Checksummed address
    deployment_tx_hash: str  # 0x-prefixed hex
    block_number: int  # Block the creation was included in
    constructor_args: Tuple[Any, ...]  # Exactly as submitted
    network: str


class VerificationStatus(Enum):
    """
    Result classes of a source verification attempt.

    Value strings are what deployment records store.
    """

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already-verified"
    FAILED = "failed"


@dataclass(frozen=True)
class VerificationOutcome:
    """Outcome of one verification attempt."""

    status: VerificationStatus
    reason: Optional[str] = None  # Service or client message for FAILED

    @property
    def succeeded(self) -> bool:
        return self.status is not VerificationStatus.FAILED


@dataclass(frozen=True)
class FundingReceipt:
    """Metadata of a mined funding transaction."""

    transaction_hash: str
    block_number: int
    value: int  # Wei
    sender: str


@dataclass
class ContractArtifact:
    """Compiled contract as emitted by Hardhat."""

    # Required fields
    contract_name: str  # e.g., "FundMe"
    source_name: str  # e.g., "contracts/FundMe.sol"
    abi: List[Dict[str, Any]]
    bytecode: str

    # Optional fields (from build info)
    solc_version: Optional[str] = None  # e.g., "0.8.18"
    solc_long_version: Optional[str] = None  # e.g., "0.8.18+commit.87f61d96"
    standard_json_input: Optional[Dict[str, Any]] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return list(item.get("inputs", []))
        return []


@dataclass
class DeploymentReport:
    """Everything one orchestration run produced."""

    network: NetworkDescriptor
    result: DeploymentResult
    record_path: Optional[str] = None
    verification: Optional[VerificationOutcome] = None  # None when skipped
    post_deploy: List[Any] = field(default_factory=list)
