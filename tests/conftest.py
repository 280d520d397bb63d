"""Shared pytest fixtures for fundme-deploy tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from fundme_deploy.artifacts import load_contract_artifact
from fundme_deploy.config import DeploymentDefaults
from fundme_deploy.exceptions import CallRevertedError
from fundme_deploy.networks import NetworkRegistry
from fundme_deploy.types import ContractArtifact, NetworkDescriptor

# First Hardhat development account
DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SEPOLIA_PRICE_FEED = "0x694AA1769357215DE4FAC081bf1f309aDC325306"
EXPLORER_API_URL = "https://api.etherscan.test/v2/api"


class FakeChain:
    """
    In-memory chain with the ChainClient interface.

    Blocks are only produced by mine(). With auto_mine every submitted
    transaction is mined into its own block right away, like Hardhat.
    Deployed FundMe contracts number their funders from 1.
    """

    def __init__(self, sender: str = DEPLOYER, auto_mine: bool = True):
        self.sender = sender
        self.auto_mine = auto_mine
        self.head = 0
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.pending: List[tuple] = []
        self.contracts: Dict[str, Dict[str, Any]] = {}
        self.deployments: List[Dict[str, Any]] = []
        self.transactions: List[Dict[str, Any]] = []
        self.revert_creation = False
        self.reject_fund = False
        self._tx_count = 0

    def _submit(self, fields: Dict[str, Any]) -> str:
        self._tx_count += 1
        tx_hash = "0x" + f"{self._tx_count:064x}"
        self.pending.append((tx_hash, fields))
        if self.auto_mine:
            self.mine()
        return tx_hash

    def mine(self, blocks: int = 1) -> None:
        for _ in range(blocks):
            self.head += 1
            for tx_hash, fields in self.pending:
                self.receipts[tx_hash] = dict(
                    fields, transactionHash=tx_hash, blockNumber=self.head
                )
            self.pending = []

    def drop(self, tx_hash: str) -> None:
        del self.receipts[tx_hash]

    def block_number(self) -> int:
        return self.head

    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return self.receipts.get(tx_hash)

    def deploy_contract(self, abi, bytecode, args) -> str:
        address = "0x" + f"{len(self.deployments) + 1:040x}"
        self.deployments.append(
            {"abi": abi, "bytecode": bytecode, "args": tuple(args), "address": address}
        )
        if self.revert_creation:
            return self._submit({"status": 0, "contractAddress": None})

        self.contracts[address] = {"price_feed": args[0], "funders": {}, "balance": 0}
        return self._submit({"status": 1, "contractAddress": address})

    def transact(self, address, abi, function_name, args=(), value=0) -> str:
        self.transactions.append(
            {"address": address, "function": function_name, "args": tuple(args), "value": value}
        )
        contract = self.contracts[address]
        if function_name == "fund":
            if self.reject_fund or value <= 0:
                raise CallRevertedError(f"fund rejected by {address}")
            contract["funders"][len(contract["funders"]) + 1] = self.sender
            contract["balance"] += value
        return self._submit({"status": 1, "contractAddress": None})

    def call(self, address, abi, function_name, args=()):
        contract = self.contracts[address]
        if function_name == "getSpecificFunder":
            try:
                return contract["funders"][args[0]]
            except KeyError as e:
                raise CallRevertedError(f"No funder at index {args[0]}") from e
        raise CallRevertedError(f"Unknown function {function_name}")


class FakeClock:
    """Monotonic clock whose sleep() advances time and mines one block."""

    def __init__(self, chain: Optional[FakeChain] = None):
        self.now = 0.0
        self.chain = chain
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self.chain is not None:
            self.chain.mine()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the path to the sample Hardhat artifacts directory."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def fundme_artifact(artifacts_dir: Path) -> ContractArtifact:
    """Load the sample FundMe artifact with its build info."""
    return load_contract_artifact(artifacts_dir, "contracts/FundMe.sol", "FundMe")


@pytest.fixture
def fake_chain() -> FakeChain:
    """Create an auto-mining fake chain."""
    return FakeChain()


@pytest.fixture
def fake_clock(fake_chain: FakeChain) -> FakeClock:
    """Create a fake clock bound to the fake chain."""
    return FakeClock(fake_chain)


@pytest.fixture
def defaults() -> DeploymentDefaults:
    return DeploymentDefaults()


@pytest.fixture
def sepolia_descriptor() -> NetworkDescriptor:
    """Return a sepolia descriptor with a configured price feed."""
    return NetworkDescriptor(
        name="sepolia",
        is_development=False,
        chain_id=11155111,
        oracle_address=SEPOLIA_PRICE_FEED,
        rpc_url="http://sepolia-rpc.example.com",
        explorer_url="https://sepolia.etherscan.io",
        explorer_api_url=EXPLORER_API_URL,
    )


@pytest.fixture
def registry(sepolia_descriptor: NetworkDescriptor) -> NetworkRegistry:
    """Create a registry with sepolia and the default development chains."""
    return NetworkRegistry({"sepolia": sepolia_descriptor}, local_rpc_url="http://127.0.0.1:8545/")


@pytest.fixture
def sample_environ() -> Dict[str, str]:
    """Return an environment mapping for a sepolia deployment."""
    return {
        "DEPLOY_NETWORK": "sepolia",
        "SEPOLIA_RPC_URL": "http://sepolia-rpc.example.com",
        "SEPOLIA_ACCOUNT_PRIVATE_KEY": "0x" + "11" * 32,
        "SEPOLIA_PRICEFEED_ADDRESS": SEPOLIA_PRICE_FEED,
        "ETHERSCAN_API_KEY": "TESTKEY",
        "CONFIRMATION_TIMEOUT": "90",
    }


@pytest.fixture
def manual_chain() -> FakeChain:
    """Create a fake chain that only mines when asked to."""
    return FakeChain(auto_mine=False)


@pytest.fixture
def manual_clock(manual_chain: FakeChain) -> FakeClock:
    """Create a fake clock bound to the manually mined chain."""
    return FakeClock(manual_chain)


@pytest.fixture
def idle_clock() -> FakeClock:
    """Create a fake clock that advances time without mining."""
    return FakeClock()
