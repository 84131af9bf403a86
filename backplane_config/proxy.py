"""
Proxy reachability probing.

Backplane proxies are often only reachable from certain networks, so each
configured candidate is tried in order against the backplane health endpoint
and the first one answering 200 is used.
"""

import logging
from typing import Optional, Sequence

import httpx

from .log_utils import redact_url

logger = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"
DEFAULT_PROBE_TIMEOUT = 2.0

_SUPPORTED_SCHEMES = ("http", "https")


def parse_absolute_url(value: str) -> Optional[httpx.URL]:
    """Parse ``value`` as an absolute http(s) URL, or return None."""
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError):
        return None
    if url.scheme not in _SUPPORTED_SCHEMES or not url.host:
        return None
    return url


def health_url(service_url: str) -> str:
    return service_url.rstrip("/") + HEALTH_PATH


class ProxyProber:
    """Check proxy candidates against the backplane health endpoint.

    Every probe builds its own client, so proxy settings never leak into
    other HTTP calls made by the process.
    """

    def __init__(self, timeout: float = DEFAULT_PROBE_TIMEOUT):
        self.timeout = timeout

    def probe(self, service_url: str, candidate: str) -> bool:
        """Return True when ``candidate`` relays a 200 from the health endpoint."""
        if parse_absolute_url(candidate) is None:
            logger.debug("proxy-url: '%s' could not be parsed.", redact_url(candidate))
            return False

        try:
            with httpx.Client(proxy=candidate, timeout=self.timeout, trust_env=False) as client:
                response = client.get(health_url(service_url))
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.info("Proxy: %s returned an error: %s", redact_url(candidate), exc)
            return False

        if response.status_code != httpx.codes.OK:
            logger.info(
                "Proxy: %s health check returned status %d",
                redact_url(candidate),
                response.status_code,
            )
            return False
        return True

    def select_proxy(self, service_url: str, candidates: Sequence[str]) -> Optional[str]:
        """Return the first reachable candidate, or None when none works."""
        for candidate in candidates:
            if self.probe(service_url, candidate):
                logger.info("Using proxy %s", redact_url(candidate))
                return candidate
        return None


def select_proxy(
    service_url: str,
    candidates: Sequence[str],
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> Optional[str]:
    """Convenience wrapper around :meth:`ProxyProber.select_proxy`."""
    return ProxyProber(timeout=timeout).select_proxy(service_url, candidates)
