"""Errors raised while resolving and checking backplane configuration."""

from typing import Optional


class BackplaneConfigError(Exception):
    """Base configuration error."""
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigFileError(BackplaneConfigError):
    """The configuration file exists but could not be parsed."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "config_file_invalid")
        self.path = path


class EnvironmentEndpointError(BackplaneConfigError):
    """No backplane URL is registered for the active runtime environment."""
    def __init__(self, environment: str):
        super().__init__(
            f"the requested API endpoint is not available for the environment: {environment}",
            "environment_endpoint_missing",
        )
        self.environment = environment


class InvalidURLError(BackplaneConfigError):
    """A URL needed for a network check is malformed."""
    def __init__(self, message: str):
        super().__init__(message, "invalid_url")


class ConnectionCheckError(BackplaneConfigError):
    """The backplane API could not be reached."""
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "connection_failed")
        self.url = url
