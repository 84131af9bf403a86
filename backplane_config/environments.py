"""Lookup of the default backplane URL for a named runtime environment."""

import logging
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from .log_utils import sanitize_for_logging

logger = logging.getLogger(__name__)


class RuntimeEnvironment(BaseModel):
    """A named deployment context and the backplane URL registered for it."""
    name: str
    backplane_url: Optional[str] = None


DEFAULT_ENVIRONMENTS: Dict[str, RuntimeEnvironment] = {
    env.name: env
    for env in (
        RuntimeEnvironment(name="production", backplane_url="https://api.backplane.openshift.com"),
        RuntimeEnvironment(name="staging", backplane_url="https://api.stage.backplane.openshift.com"),
        RuntimeEnvironment(name="integration", backplane_url="https://api.integration.backplane.openshift.com"),
    )
}


class EnvironmentURLResolver:
    """Resolve runtime environment names to backplane URLs."""

    def __init__(self, environments: Optional[Mapping[str, RuntimeEnvironment]] = None):
        registry = DEFAULT_ENVIRONMENTS if environments is None else environments
        self._environments = {name.lower(): env for name, env in registry.items()}

    def resolve_url(self, environment_name: str) -> Tuple[str, bool]:
        """Return ``(url, found)`` for ``environment_name``.

        ``found`` is False when the environment is unknown or has no
        backplane URL registered.
        """
        env = self._environments.get((environment_name or "").lower())
        if env is None or not env.backplane_url:
            logger.debug("No backplane URL registered for environment %s", sanitize_for_logging(environment_name))
            return "", False
        logger.info("Backplane URL retrieved via %s environment: %s", env.name, env.backplane_url)
        return env.backplane_url, True
