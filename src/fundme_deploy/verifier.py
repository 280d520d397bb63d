"""Block explorer source verification for fundme-deploy."""

import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

import requests
from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils.abi import collapse_if_tuple

from .constants import ALREADY_VERIFIED_MARKER
from .exceptions import VerificationFailedError
from .types import ContractArtifact, VerificationOutcome, VerificationStatus

logger = logging.getLogger(__name__)

PENDING_MARKER = "pending in queue"
PASS_MARKER = "pass - verified"
NOT_INDEXED_MARKER = "unable to locate contractcode"


def is_already_verified(message: str) -> bool:
    """Default classifier: the explorer reports a prior verification."""
    return ALREADY_VERIFIED_MARKER in message.lower()


def classify_verification_error(
    message: str, classifier: Callable[[str], bool] = is_already_verified
) -> VerificationOutcome:
    """
    Turn a verification error message into an outcome.

    Args:
        message: Error text from the explorer or the HTTP layer
        classifier: Returns True when the message means "already verified"

    Returns:
        ALREADY_VERIFIED outcome if the classifier matches, FAILED otherwise
    """
    if classifier(message):
        return VerificationOutcome(VerificationStatus.ALREADY_VERIFIED)
    return VerificationOutcome(VerificationStatus.FAILED, reason=message)


def encode_constructor_args(artifact: ContractArtifact, args: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments the way explorers expect them.

    Returns:
        Hex string without 0x prefix (empty for no arguments)

    Raises:
        VerificationFailedError: If the arguments do not fit the constructor ABI
    """
    types = [collapse_if_tuple(item) for item in artifact.constructor_inputs]
    if len(types) != len(args):
        raise VerificationFailedError(
            f"Constructor takes {len(types)} argument(s), got {len(args)}"
        )
    if not types:
        return ""

    try:
        return encode(types, list(args)).hex()
    except EncodingError as e:
        raise VerificationFailedError(f"Cannot encode constructor arguments: {e}") from e


class EtherscanClient:
    """Client for the Etherscan contract verification API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        chain_id: int,
        session: Optional[requests.Session] = None,
        poll_interval: float = 5.0,
        max_polls: int = 20,
        max_submit_attempts: int = 5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.chain_id = chain_id
        self.session = session or requests.Session()
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.max_submit_attempts = max_submit_attempts
        self._sleep = sleep

    def _request(self, method: str, data: Dict[str, Any]) -> Dict[str, Any]:
        params = {"chainid": self.chain_id}
        payload = dict(data, apikey=self.api_key)

        try:
            if method == "POST":
                response = self.session.post(self.api_url, params=params, data=payload, timeout=30)
            else:
                params.update(payload)
                response = self.session.get(self.api_url, params=params, timeout=30)
        except requests.RequestException as e:
            raise VerificationFailedError(f"Network error during explorer call: {e}") from e

        if response.status_code != 200:
            raise VerificationFailedError(
                f"Explorer request failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise VerificationFailedError("Explorer returned a non-JSON response") from e

        if not isinstance(result, dict):
            raise VerificationFailedError("Explorer returned an unexpected response")
        return result

    def submit(
        self, artifact: ContractArtifact, contract_address: str, constructor_args: Sequence[Any]
    ) -> str:
        """
        Submit source for verification.

        Args:
            artifact: Compiled contract with build info
            contract_address: Deployed address
            constructor_args: Arguments used at deployment

        Returns:
            Verification GUID to poll

        Raises:
            VerificationFailedError: If the explorer rejects the submission
        """
        if artifact.standard_json_input is None or artifact.solc_long_version is None:
            raise VerificationFailedError(
                f"No build info for {artifact.contract_name}, cannot submit source"
            )

        data = {
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": contract_address,
            "sourceCode": json.dumps(artifact.standard_json_input),
            "codeformat": "solidity-standard-json-input",
            "contractname": artifact.fully_qualified_name,
            "compilerversion": f"v{artifact.solc_long_version}",
            # Spelling is the API's own
            "constructorArguements": encode_constructor_args(artifact, constructor_args),
        }

        for attempt in range(1, self.max_submit_attempts + 1):
            result = self._request("POST", data)
            message = str(result.get("result", ""))

            if result.get("status") == "1":
                return message

            # The explorer may not have indexed a just-confirmed contract yet
            if NOT_INDEXED_MARKER in message.lower() and attempt < self.max_submit_attempts:
                logger.info(
                    "Explorer has not indexed %s yet (attempt %d/%d)",
                    contract_address,
                    attempt,
                    self.max_submit_attempts,
                )
                self._sleep(self.poll_interval)
                continue

            raise VerificationFailedError(message or str(result.get("message", "")))

        raise VerificationFailedError(f"Explorer never indexed {contract_address}")

    def check_status(self, guid: str) -> Dict[str, Any]:
        return self._request(
            "GET", {"module": "contract", "action": "checkverifystatus", "guid": guid}
        )

    def wait_for_result(self, guid: str) -> str:
        """
        Poll a submission until the explorer decides.

        Returns:
            Final success message

        Raises:
            VerificationFailedError: If verification fails or stays pending
        """
        for _ in range(self.max_polls):
            result = self.check_status(guid)
            message = str(result.get("result", ""))

            if PENDING_MARKER in message.lower():
                self._sleep(self.poll_interval)
                continue

            if result.get("status") == "1" or PASS_MARKER in message.lower():
                return message

            raise VerificationFailedError(message)

        raise VerificationFailedError(
            f"Verification {guid} still pending after {self.max_polls} polls"
        )


class Verifier:
    """Best-effort source verification of a deployed contract."""

    def __init__(
        self,
        explorer: EtherscanClient,
        artifact: ContractArtifact,
        classifier: Callable[[str], bool] = is_already_verified,
    ):
        self.explorer = explorer
        self.artifact = artifact
        self.classifier = classifier

    def verify(self, contract_address: str, constructor_args: Sequence[Any]) -> VerificationOutcome:
        """
        Verify a deployed contract. Never raises for explorer failures.

        Args:
            contract_address: Deployed address
            constructor_args: Arguments exactly as used at deployment

        Returns:
            VerificationOutcome (VERIFIED, ALREADY_VERIFIED or FAILED)
        """
        logger.info("Verifying contract at address: %s", contract_address)

        try:
            guid = self.explorer.submit(self.artifact, contract_address, constructor_args)
            message = self.explorer.wait_for_result(guid)
        except VerificationFailedError as e:
            outcome = classify_verification_error(str(e), self.classifier)
            if outcome.status is VerificationStatus.ALREADY_VERIFIED:
                logger.info("Contract already verified")
            else:
                logger.error("Failed to verify contract at %s: %s", contract_address, e)
            return outcome

        logger.info("Contract verified: %s", message)
        return VerificationOutcome(VerificationStatus.VERIFIED)
