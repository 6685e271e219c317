"""Custom exception classes for numan."""


class NumanError(Exception):
    """Base exception for all numan errors.

    Attributes:
        message: Human-readable error message.
        exit_code: Process exit code used when the error ends a command.
    """

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            exit_code: Optional override of the class exit code.
        """
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code
        super().__init__(self.message)


class InputValidationError(NumanError):
    """Bad command line input: missing file, wrong extension, no api key."""
    pass


class ConfigCorruptError(NumanError):
    """The persisted configuration file cannot be parsed."""

    exit_code = 5

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Configuration file {path} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class DirectoryUnreadableError(NumanError):
    """A package directory cannot be listed."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Cannot read directory {path}: {reason}")
        self.path = path
        self.reason = reason


class UploadTransportError(NumanError):
    """The upload request failed below HTTP (DNS, TLS, timeout, refused)."""
    pass


class MalformedVersionError(NumanError, ValueError):
    """A file name does not carry a ``major.minor.patch`` version."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(f"Malformed package file name '{file_name}': {reason}")
        self.file_name = file_name
        self.reason = reason
