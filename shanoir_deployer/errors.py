"""Domain errors for shanoir-deployer."""


class ConfigurationError(ValueError):
    """Raised when the configuration cannot produce a consistent chart."""
