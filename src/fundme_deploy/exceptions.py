"""Custom exception classes for fundme-deploy."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class UnknownNetworkError(DeploymentError, ValueError):
    """Raised when a network has no registry entry and is not a development chain."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when settings cannot produce a usable signer or value."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the compiled contract artifact is not found."""

    pass


class ConstructorArgumentsError(DeploymentError, ValueError):
    """Raised when constructor arguments do not match the constructor ABI."""

    pass


class DeploymentRevertedError(DeploymentError):
    """Raised when the contract creation transaction reverts or is dropped."""

    pass


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when confirmations do not accumulate before the deadline."""

    pass


class VerificationFailedError(DeploymentError):
    """Raised when the block explorer rejects a verification request."""

    pass


class CallRevertedError(DeploymentError):
    """Raised when the deployed contract rejects a state-changing call."""

    pass
