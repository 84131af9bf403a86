"""Environment-backed settings for backplane configuration resolution."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# Environment variable names
BACKPLANE_URL_ENV_NAME = "BACKPLANE_URL"
BACKPLANE_PROXY_ENV_NAME = "HTTPS_PROXY"
BACKPLANE_CONFIG_PATH_ENV_NAME = "BACKPLANE_CONFIG"
BACKPLANE_ENVIRONMENT_ENV_NAME = "BACKPLANE_ENVIRONMENT"


class BackplaneSettings(BaseSettings):
    """Settings loaded from environment variables.

    Unset variables stay ``None`` so callers can tell "not set" apart from
    "set to an empty string".
    """

    # Overrides that take precedence over the config file
    backplane_url: Optional[str] = Field(
        default=None,
        description="Backplane API URL; bypasses the config file and environment lookup",
        validation_alias=BACKPLANE_URL_ENV_NAME,
    )
    proxy_url: Optional[str] = Field(
        default=None,
        description="Proxy URL; replaces proxy-url from the config file",
        validation_alias=BACKPLANE_PROXY_ENV_NAME,
    )
    config_path: Optional[str] = Field(
        default=None,
        description="Explicit path of the backplane config file",
        validation_alias=BACKPLANE_CONFIG_PATH_ENV_NAME,
    )

    # Active runtime environment used to look up the default backplane URL
    environment: str = Field(default="production", validation_alias=BACKPLANE_ENVIRONMENT_ENV_NAME)

    # Network timeouts in seconds
    probe_timeout: float = Field(default=2.0, validation_alias="BACKPLANE_PROBE_TIMEOUT")
    connection_timeout: float = Field(default=5.0, validation_alias="BACKPLANE_CONNECTION_TIMEOUT")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = {
        "extra": "ignore",
        "env_prefix": "",
        "case_sensitive": True,
        "populate_by_name": True,
    }
