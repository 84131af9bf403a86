"""
Backplane connection configuration.

Resolves the backplane API URL, proxy, session directory and initial role ARN
from environment variables, the backplane config file and the runtime
environment registry, then checks the result is usable.

Example usage:
    from backplane_config import ConfigurationResolver, check_connection, validate_configuration

    config = ConfigurationResolver().resolve("staging")
    if validate_configuration(config).valid:
        check_connection(config)
"""

from backplane_config.connection import check_connection
from backplane_config.environments import EnvironmentURLResolver, RuntimeEnvironment
from backplane_config.errors import (
    BackplaneConfigError,
    ConfigFileError,
    ConnectionCheckError,
    EnvironmentEndpointError,
    InvalidURLError,
)
from backplane_config.models import ResolvedConfiguration, ValidationResult
from backplane_config.proxy import ProxyProber, select_proxy
from backplane_config.resolver import ConfigurationResolver, get_backplane_configuration
from backplane_config.settings import BackplaneSettings
from backplane_config.sources import SourceReader, config_directory, config_file_path
from backplane_config.validator import validate_configuration, verify_configuration
from backplane_config.version import VERSION

__version__ = VERSION
__all__ = [
    "BackplaneConfigError",
    "BackplaneSettings",
    "ConfigFileError",
    "ConfigurationResolver",
    "ConnectionCheckError",
    "EnvironmentEndpointError",
    "EnvironmentURLResolver",
    "InvalidURLError",
    "ProxyProber",
    "ResolvedConfiguration",
    "RuntimeEnvironment",
    "SourceReader",
    "ValidationResult",
    "VERSION",
    "__version__",
    "check_connection",
    "config_directory",
    "config_file_path",
    "get_backplane_configuration",
    "select_proxy",
    "validate_configuration",
    "verify_configuration",
]
