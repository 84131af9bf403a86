"""
Backplane configuration resolution.

Precedence, highest first:
- BACKPLANE_URL for the API URL, then the runtime environment registry
- HTTPS_PROXY for the proxy list, then proxy-url in the config file
- session-dir and assume-initial-arn from the config file
"""

import logging
from typing import Optional

from .environments import EnvironmentURLResolver
from .errors import EnvironmentEndpointError
from .log_utils import sanitize_for_logging
from .models import ResolvedConfiguration
from .proxy import ProxyProber
from .settings import BACKPLANE_URL_ENV_NAME, BackplaneSettings
from .sources import (
    ASSUME_INITIAL_ARN_KEY,
    PROXY_URL_KEY,
    SESSION_DIR_KEY,
    URL_KEY,
    SourceReader,
    config_file_path,
)

logger = logging.getLogger(__name__)


class ConfigurationResolver:
    """Build a :class:`ResolvedConfiguration` from env, config file and environment registry.

    Nothing is cached between calls; every :meth:`resolve` re-reads the
    environment and the config file and re-probes the proxies.
    """

    def __init__(
        self,
        settings: Optional[BackplaneSettings] = None,
        environment_resolver: Optional[EnvironmentURLResolver] = None,
        prober: Optional[ProxyProber] = None,
    ):
        self._settings = settings
        self._environment_resolver = environment_resolver or EnvironmentURLResolver()
        self._prober = prober

    def resolve(self, environment: Optional[str] = None) -> ResolvedConfiguration:
        """Resolve the backplane configuration.

        Args:
            environment: Runtime environment used when BACKPLANE_URL is not set.
                Defaults to the BACKPLANE_ENVIRONMENT setting.

        Raises:
            ConfigFileError: The config file exists but cannot be parsed.
            EnvironmentEndpointError: No URL override and the environment has
                no registered backplane URL.
        """
        settings = self._settings or BackplaneSettings()
        reader = SourceReader.load(
            config_file_path(settings),
            overrides={PROXY_URL_KEY: settings.proxy_url},
        )

        if reader.get(URL_KEY) != "":
            logger.warning("Manual URL configuration is deprecated, please remove URL key from Backplane configuration")

        service_url = self._resolve_service_url(settings, environment)

        prober = self._prober or ProxyProber(timeout=settings.probe_timeout)
        proxy_url = prober.select_proxy(service_url, reader.get_list(PROXY_URL_KEY))
        if proxy_url is None:
            logger.warning(
                "No proxy configuration available. This may result in failing commands "
                "as backplane-api is only available from select networks."
            )

        return ResolvedConfiguration(
            service_url=service_url,
            proxy_url=proxy_url,
            session_directory=reader.get(SESSION_DIR_KEY),
            assume_role_arn=reader.get(ASSUME_INITIAL_ARN_KEY),
        )

    def _resolve_service_url(self, settings: BackplaneSettings, environment: Optional[str]) -> str:
        if settings.backplane_url is not None:
            logger.info(
                "Backplane key %s set via env vars: %s",
                BACKPLANE_URL_ENV_NAME,
                sanitize_for_logging(settings.backplane_url),
            )
            return settings.backplane_url

        environment_name = environment or settings.environment
        url, found = self._environment_resolver.resolve_url(environment_name)
        if not found:
            raise EnvironmentEndpointError(environment_name)
        return url


def get_backplane_configuration(environment: Optional[str] = None) -> ResolvedConfiguration:
    """Resolve the backplane configuration with default collaborators."""
    return ConfigurationResolver().resolve(environment)
