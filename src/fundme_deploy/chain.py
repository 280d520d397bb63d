"""JSON-RPC chain access for fundme-deploy."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError, TransactionNotFound

from .exceptions import CallRevertedError, ConfigurationError, DeploymentRevertedError

logger = logging.getLogger(__name__)


class ChainClient:
    """
    Signs and submits transactions through a web3 connection.

    Transactions are signed locally when a private key is supplied. Otherwise
    the node's first unlocked account is used, which is how Hardhat and
    Ganache expose their funded development accounts.
    """

    def __init__(self, web3: Web3, account: Optional[LocalAccount] = None):
        self.web3 = web3
        self._account = account

        if account is not None:
            self._sender = account.address
        else:
            accounts = web3.eth.accounts
            if not accounts:
                raise ConfigurationError(
                    "No private key configured and the node exposes no unlocked accounts"
                )
            self._sender = accounts[0]

    @classmethod
    def connect(cls, rpc_url: str, private_key: Optional[str] = None) -> "ChainClient":
        """
        Connect to a JSON-RPC node over HTTP.

        Args:
            rpc_url: Node endpoint
            private_key: Hex private key, or None to use an unlocked node account

        Raises:
            ConfigurationError: If rpc_url is empty or the key is malformed
        """
        if not rpc_url:
            raise ConfigurationError("RPC URL is not configured")

        account = None
        if private_key is not None:
            try:
                account = Account.from_key(private_key)
            except (ValueError, TypeError) as e:
                raise ConfigurationError(f"Invalid private key: {e}") from e

        return cls(Web3(Web3.HTTPProvider(rpc_url)), account)

    @property
    def sender(self) -> str:
        return self._sender

    def block_number(self) -> int:
        return self.web3.eth.block_number

    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """
        Get a transaction receipt.

        Returns:
            Receipt, or None if the transaction is not (or no longer) mined
        """
        try:
            return self.web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None

    def _send(self, transaction: Dict[str, Any]) -> str:
        if self._account is None:
            tx_hash = self.web3.eth.send_transaction(transaction)
        else:
            transaction.setdefault(
                "nonce", self.web3.eth.get_transaction_count(self._sender, "pending")
            )
            signed = self._account.sign_transaction(transaction)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3.to_hex(tx_hash)

    def deploy_contract(
        self, abi: List[Dict[str, Any]], bytecode: str, args: Sequence[Any]
    ) -> str:
        """
        Submit a contract creation transaction.

        Returns:
            Transaction hash

        Raises:
            DeploymentRevertedError: If the node rejects the creation up front
        """
        factory = self.web3.eth.contract(abi=abi, bytecode=bytecode)
        try:
            transaction = factory.constructor(*args).build_transaction({"from": self._sender})
        except ContractLogicError as e:
            raise DeploymentRevertedError(f"Contract creation would revert: {e}") from e
        return self._send(transaction)

    def transact(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
        value: int = 0,
    ) -> str:
        """
        Submit a state-changing contract call.

        Returns:
            Transaction hash

        Raises:
            CallRevertedError: If the contract rejects the call
        """
        contract = self.web3.eth.contract(address=address, abi=abi)
        function = getattr(contract.functions, function_name)(*args)
        try:
            transaction = function.build_transaction({"from": self._sender, "value": value})
        except ContractLogicError as e:
            raise CallRevertedError(f"{function_name} rejected by {address}: {e}") from e
        return self._send(transaction)

    def call(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """
        Read contract state.

        Raises:
            CallRevertedError: If the contract reverts the call
        """
        contract = self.web3.eth.contract(address=address, abi=abi)
        try:
            return getattr(contract.functions, function_name)(*args).call()
        except ContractLogicError as e:
            raise CallRevertedError(f"{function_name} reverted on {address}: {e}") from e


@dataclass
class DeployedContract:
    """Live handle on a deployed contract."""

    address: str
    abi: List[Dict[str, Any]]
    client: Any  # ChainClient, or any object with the same transact/call API

    def transact(self, function_name: str, *args: Any, value: int = 0) -> str:
        return self.client.transact(self.address, self.abi, function_name, args, value)

    def call(self, function_name: str, *args: Any) -> Any:
        return self.client.call(self.address, self.abi, function_name, args)
