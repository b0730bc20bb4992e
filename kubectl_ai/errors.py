"""Exceptions raised by the prompt-to-apply pipeline.

Every failure in a run is terminal: the CLI catches ``KubectlAIError``,
prints the message and exits with a non-zero status.
"""


class KubectlAIError(Exception):
    """Base exception for kubectl-ai errors."""

    pass


class ConfigurationError(KubectlAIError):
    """Raised when configuration is missing or invalid (e.g. no API key)."""

    pass


class BackendConstructionError(KubectlAIError):
    """Raised when the completion client cannot be built from configuration."""

    pass


class BackendError(KubectlAIError):
    """Raised when the completion backend fails or returns no result."""

    pass


class CancellationError(KubectlAIError):
    """Raised when the completion call is interrupted by the user."""

    pass


class ConfirmationError(KubectlAIError):
    """Raised when the interactive confirmation prompt cannot complete."""

    pass


class ApplyError(KubectlAIError):
    """Raised when kubectl rejects or fails to apply a manifest."""

    pass
