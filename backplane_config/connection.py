"""Final reachability check of the backplane API."""

import logging

import httpx

from .errors import ConnectionCheckError, InvalidURLError
from .log_utils import redact_url, sanitize_for_logging
from .models import ResolvedConfiguration
from .proxy import parse_absolute_url

logger = logging.getLogger(__name__)

DEFAULT_CONNECTION_TIMEOUT = 5.0


def check_connection(config: ResolvedConfiguration, timeout: float = DEFAULT_CONNECTION_TIMEOUT) -> None:
    """Send one HEAD request to the backplane URL, through the proxy if set.

    Any HTTP status counts as reachable; only transport failures are errors.

    Raises:
        InvalidURLError: The backplane or proxy URL is malformed.
        ConnectionCheckError: The request failed at the transport level.
    """
    if parse_absolute_url(config.service_url) is None:
        raise InvalidURLError(f"invalid backplane URL: '{sanitize_for_logging(config.service_url)}'")
    if config.proxy_url is not None and parse_absolute_url(config.proxy_url) is None:
        raise InvalidURLError(f"invalid proxy URL: '{redact_url(config.proxy_url)}'")

    safe_url = sanitize_for_logging(config.service_url)
    try:
        with httpx.Client(proxy=config.proxy_url, timeout=timeout, trust_env=False) as client:
            response = client.head(config.service_url)
    except httpx.RequestError as exc:
        logger.error("Request failed to %s: %s", safe_url, exc)
        raise ConnectionCheckError(
            f"unable to connect to backplane API at {safe_url}: {exc}",
            url=config.service_url,
        ) from exc

    logger.info(
        "Backplane API at %s answered with status %d%s",
        safe_url,
        response.status_code,
        f" via proxy {redact_url(config.proxy_url)}" if config.uses_proxy else "",
    )
