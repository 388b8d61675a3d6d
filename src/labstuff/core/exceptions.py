"""Exception classes for the labstuff core module."""


class LabstuffError(Exception):
    """Base exception for all labstuff errors."""


class ConfigurationError(LabstuffError):
    """Raised when a plate or layout cannot be built from its configuration."""

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class ValidationError(LabstuffError):
    """Raised when a well is constructed with missing or out-of-range arguments."""

    def __init__(self, message: str, position: str | None = None) -> None:
        super().__init__(message)
        self.position = position


class StoreError(LabstuffError):
    """Raised when a stored object cannot be written or read back."""

    def __init__(self, message: str, path: str | None = None) -> None:
        msg = f"{message}: {path}" if path else message
        super().__init__(msg)
        self.path = path
