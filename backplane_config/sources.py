"""
Layered key/value source for backplane settings.

Values come from two tiers:
1. Overrides bound to environment variables (checked first)
2. The JSON config file (fallback)

A value is never merged from both tiers; the first tier that has the key wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigFileError
from .log_utils import sanitize_for_logging
from .settings import BackplaneSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_SUBPATH = Path(".config") / "backplane"
DEFAULT_CONFIG_FILENAME = "config.json"

# Keys recognized in the config file
URL_KEY = "url"  # deprecated
PROXY_URL_KEY = "proxy-url"
SESSION_DIR_KEY = "session-dir"
ASSUME_INITIAL_ARN_KEY = "assume-initial-arn"


def config_file_path(settings: Optional[BackplaneSettings] = None) -> Path:
    """Return the backplane config file path.

    BACKPLANE_CONFIG wins when set; otherwise ~/.config/backplane/config.json.
    """
    settings = settings or BackplaneSettings()
    if settings.config_path is not None:
        return Path(settings.config_path)
    return Path.home() / DEFAULT_CONFIG_SUBPATH / DEFAULT_CONFIG_FILENAME


def config_directory(settings: Optional[BackplaneSettings] = None) -> Path:
    """Return the directory holding the backplane config file."""
    return config_file_path(settings).parent


class SourceReader:
    """Read settings from env-bound overrides, falling back to file values."""

    def __init__(
        self,
        file_values: Optional[Dict[str, Any]] = None,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
        path: Optional[Path] = None,
    ):
        self._file_values: Dict[str, Any] = dict(file_values or {})
        self._overrides: Dict[str, Optional[str]] = dict(overrides or {})
        self.path = path

    @classmethod
    def load(
        cls,
        path: Path,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
    ) -> "SourceReader":
        """Load the config file at ``path`` and bind ``overrides`` on top of it.

        A missing file is expected on first run and yields an env-only reader.

        Raises:
            ConfigFileError: The file exists but is unreadable, is not valid
                JSON, or its top level is not an object.
        """
        path = Path(path)
        if not path.is_file():
            logger.info("No backplane config file at %s, using environment only", sanitize_for_logging(path))
            return cls(overrides=overrides)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("JSON parsing error in %s: %s", sanitize_for_logging(path), e)
            raise ConfigFileError(f"unable to parse backplane config file {path}: {e}", path=str(path)) from e
        except OSError as e:
            logger.error("Unexpected error reading %s: %s", sanitize_for_logging(path), e)
            raise ConfigFileError(f"unable to read backplane config file {path}: {e}", path=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigFileError(
                f"invalid backplane config file {path}: expected a JSON object, got {type(data).__name__}",
                path=str(path),
            )

        logger.info("Loaded backplane config from %s", sanitize_for_logging(path))
        return cls(file_values=data, overrides=overrides, path=path)

    @property
    def file_loaded(self) -> bool:
        return self.path is not None

    def _lookup(self, key: str) -> Any:
        # Empty env values count as unset so the file value still applies
        override = self._overrides.get(key)
        if override:
            logger.debug("Key %s taken from environment override", key)
            return override
        return self._file_values.get(key)

    def get(self, key: str) -> str:
        """Return the value for ``key`` as a string, or "" when absent."""
        value = self._lookup(key)
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        logger.warning(
            "Ignoring %s in backplane config: expected a string, got %s",
            key,
            sanitize_for_logging(type(value).__name__),
        )
        return ""

    def get_list(self, key: str) -> List[str]:
        """Return the value for ``key`` as an ordered list of strings.

        A string value is split on whitespace; a list keeps its order.
        """
        value = self._lookup(key)
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, list):
            return [item if isinstance(item, str) else json.dumps(item) for item in value if item is not None]
        logger.warning(
            "Ignoring %s in backplane config: expected a string or list, got %s",
            key,
            sanitize_for_logging(type(value).__name__),
        )
        return []
