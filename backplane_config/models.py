"""Value types produced by configuration resolution."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResolvedConfiguration(BaseModel):
    """Backplane connection settings produced by a single resolve call.

    ``proxy_url`` is only ever populated with a candidate that answered the
    backplane health check during that call; ``None`` means connect directly.
    """

    model_config = ConfigDict(frozen=True)

    service_url: str = ""
    proxy_url: Optional[str] = None
    session_directory: str = ""
    assume_role_arn: str = ""

    @property
    def uses_proxy(self) -> bool:
        return self.proxy_url is not None

    def as_config_dict(self) -> Dict[str, Optional[str]]:
        """Return the values keyed the way the config file names them."""
        return {
            "url": self.service_url,
            "proxy-url": self.proxy_url,
            "session-dir": self.session_directory,
            "assume-initial-arn": self.assume_role_arn,
        }


class ValidationResult(BaseModel):
    """Outcome of checking a configuration for mandatory fields."""
    valid: bool
    missing_fields: List[str] = Field(default_factory=list)
