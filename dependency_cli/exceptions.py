"""Custom exceptions for dependency-cli."""


class DependencyCliError(Exception):
    """Base exception for all dependency-cli errors."""


class ManifestReadError(DependencyCliError):
    """Raised when package.json is missing, unreadable, or not a JSON object."""


class UsageScanError(DependencyCliError):
    """Raised when the usage analyzer fails or returns unusable output."""


class LockfileParseError(DependencyCliError):
    """Raised when package-lock.json exists but cannot be parsed."""


class RegistryQueryError(DependencyCliError):
    """Raised when an outdated/audit query produces no parseable output."""


class FixActionError(DependencyCliError):
    """Raised when a remediation action fails for one fix category."""


class CommandError(DependencyCliError):
    """Raised when an external command cannot be run to completion."""

    def __init__(self, args: list[str], message: str):
        super().__init__(f"{' '.join(args)}: {message}")


class CommandNotFoundError(CommandError):
    """Raised when the executable of an external command does not exist."""


class CommandTimeoutError(CommandError):
    """Raised when an external command exceeds its timeout."""

    def __init__(self, args: list[str], timeout: float):
        self.timeout = timeout
        super().__init__(args, f"timed out after {timeout:g}s")
