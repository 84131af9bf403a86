"""CLI interface for backplane configuration.

This CLI allows you to:
- Show the resolved configuration
- Validate mandatory configuration fields
- Check the connection to the backplane API
- Show where the configuration file is read from
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .connection import check_connection
from .errors import BackplaneConfigError
from .resolver import ConfigurationResolver
from .settings import BackplaneSettings
from .sources import config_file_path
from .validator import verify_configuration

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format='%(levelname)s: %(message)s')


def _apply_env_file(env_path: Path) -> None:
    """Load environment variables from a .env file."""
    from dotenv import load_dotenv

    if not env_path.exists():
        print(f"Error: env file not found: {env_path}", file=sys.stderr)
        sys.exit(2)

    load_dotenv(dotenv_path=str(env_path))


def show_config(args, settings: BackplaneSettings) -> int:
    """Resolve and print the configuration as JSON."""
    config = ConfigurationResolver(settings).resolve(args.environment)
    print(json.dumps(config.as_config_dict(), indent=2))
    return 0


def validate_config(args, settings: BackplaneSettings) -> int:
    """Resolve the configuration and check its mandatory fields."""
    print("🔍 Validating backplane configuration...")
    config = ConfigurationResolver(settings).resolve(args.environment)
    result = verify_configuration(config, config_file_path(settings))

    if result.valid:
        print("✅ Config fields are populated and not empty")
        return 0
    print(f"❌ Missing fields: {', '.join(result.missing_fields)}")
    return 1


def check_api_connection(args, settings: BackplaneSettings) -> int:
    """Resolve the configuration and test the connection to the backplane API."""
    config = ConfigurationResolver(settings).resolve(args.environment)
    route = f"via proxy {config.proxy_url}" if config.uses_proxy else "directly"
    print(f"🔌 Connecting to {config.service_url} {route}...")
    check_connection(config, timeout=settings.connection_timeout)
    print("✅ Backplane API is reachable")
    return 0


def show_config_paths(args, settings: BackplaneSettings) -> int:
    """Show where the configuration file is read from."""
    path = config_file_path(settings)
    exists = "✅" if path.is_file() else "❌"
    print(f"📍 Backplane config file:\n   {exists} {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for the backplane-config CLI."""
    parser = argparse.ArgumentParser(
        prog="backplane-config",
        description="Backplane configuration CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  backplane-config show
  backplane-config validate
  backplane-config --environment staging check
  backplane-config paths
        """
    )
    parser.add_argument(
        "--env",
        dest="env_file",
        default=None,
        help="Path to a .env file to load before reading settings.",
    )
    parser.add_argument(
        "--environment",
        default=None,
        help="Runtime environment used to look up the backplane URL (default: BACKPLANE_ENVIRONMENT or production).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO).",
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    show_parser = subparsers.add_parser('show', help='Print the resolved configuration')
    show_parser.set_defaults(func=show_config)

    validate_parser = subparsers.add_parser('validate', help='Validate mandatory configuration fields')
    validate_parser.set_defaults(func=validate_config)

    check_parser = subparsers.add_parser('check', help='Check the connection to the backplane API')
    check_parser.set_defaults(func=check_api_connection)

    paths_parser = subparsers.add_parser('paths', help='Show the configuration file path')
    paths_parser.set_defaults(func=show_config_paths)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.env_file:
        _apply_env_file(Path(args.env_file))

    settings = BackplaneSettings()
    _setup_logging(args.log_level or settings.log_level)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user")
        return 1
    except BackplaneConfigError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
