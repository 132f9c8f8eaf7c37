"""Error taxonomy for batch dispatch."""


class MultiSendError(Exception):
    """Base class for all multi-send errors."""


class ConfigurationError(MultiSendError, ValueError):
    """Raised before any dispatch when the batch configuration is invalid."""


class SubmissionError(MultiSendError):
    """Raised when a node rejects a transfer or cannot be reached."""

    def __init__(self, message: str, connectivity: bool = False) -> None:
        super().__init__(message)
        self.connectivity = connectivity


class ConfirmationError(MultiSendError):
    """Raised when a submitted transfer is not confirmed."""


class ReportingError(MultiSendError):
    """Raised when report decoration (e.g. currency symbol) is unavailable."""
