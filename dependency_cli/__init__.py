"""dependency-cli: dependency health checks and remediation for npm projects."""

__version__ = "1.0.1"
