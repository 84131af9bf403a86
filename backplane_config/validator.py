"""Checks for mandatory backplane configuration fields."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .log_utils import sanitize_for_logging
from .models import ResolvedConfiguration, ValidationResult
from .sources import ASSUME_INITIAL_ARN_KEY, SESSION_DIR_KEY, URL_KEY

logger = logging.getLogger(__name__)

REMEDIATION_TEMPLATE = """\
Your backplane CLI Config should contain at a minimum:
{
  "assume-initial-arn": "<arn in quotes>"
}
NOTE: Set the backplane URL through the BACKPLANE_URL environment variable or select a runtime environment; the "url" config key is deprecated
"""


def validate_configuration(config: ResolvedConfiguration) -> ValidationResult:
    """Report which mandatory fields of ``config`` are empty.

    An empty session directory is logged but never makes the config invalid.
    """
    logger.info("Validating backplane config fields...")
    missing = []

    if not config.service_url:
        logger.warning("%s in backplane config is either empty or undefined, please define the field %s", URL_KEY, URL_KEY)
        missing.append(URL_KEY)
    if not config.session_directory:
        logger.warning(
            "%s in backplane config is either empty or undefined, please define the field %s",
            SESSION_DIR_KEY,
            SESSION_DIR_KEY,
        )
    if not config.assume_role_arn:
        logger.warning(
            "%s in backplane config is either empty or undefined, please define the field %s",
            ASSUME_INITIAL_ARN_KEY,
            ASSUME_INITIAL_ARN_KEY,
        )
        missing.append(ASSUME_INITIAL_ARN_KEY)

    if not missing:
        logger.info("Config fields are populated and not empty")
    return ValidationResult(valid=not missing, missing_fields=missing)


def verify_configuration(
    config: ResolvedConfiguration,
    config_path: Optional[Path] = None,
    out: Optional[TextIO] = None,
) -> ValidationResult:
    """Validate ``config`` and, when invalid, print remediation help to ``out``.

    The help is the expected config shape followed by the raw content of the
    config file at ``config_path`` if it exists.
    """
    result = validate_configuration(config)
    if result.valid:
        return result

    out = out or sys.stdout
    out.write(REMEDIATION_TEMPLATE)
    out.write("\nYour current specified config file shows:\n")
    if config_path is not None and Path(config_path).is_file():
        try:
            out.write(Path(config_path).read_text(encoding="utf-8"))
        except OSError as e:
            logger.error("Error reading config file %s: %s", sanitize_for_logging(config_path), e)
    return result
