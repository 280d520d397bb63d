"""
fundme-deploy: deploy, verify and exercise the FundMe contract across networks
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ArtifactNotFoundError,
    CallRevertedError,
    ConfigurationError,
    ConfirmationTimeoutError,
    ConstructorArgumentsError,
    DeploymentError,
    DeploymentRevertedError,
    UnknownNetworkError,
    VerificationFailedError,
)
from .networks import NetworkRegistry
from .types import (
    DeploymentParameters,
    DeploymentResult,
    NetworkDescriptor,
    VerificationOutcome,
    VerificationStatus,
)
from .workflow import resume_verification, run_deployment

try:
    __version__ = version("fundme-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "run_deployment",
    "resume_verification",
    "NetworkRegistry",
    "NetworkDescriptor",
    "DeploymentParameters",
    "DeploymentResult",
    "VerificationOutcome",
    "VerificationStatus",
    "DeploymentError",
    "UnknownNetworkError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "ConstructorArgumentsError",
    "DeploymentRevertedError",
    "ConfirmationTimeoutError",
    "VerificationFailedError",
    "CallRevertedError",
]
