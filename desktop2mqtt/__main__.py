"""Entry point for running desktop2mqtt as a module.

Usage:
    python -m desktop2mqtt                    # Use env vars or defaults
    python -m desktop2mqtt -c /path/to/config.yaml
    python -m desktop2mqtt --help
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from . import __version__
from .app import run_app
from .config import create_default_config, print_env_help

DEFAULT_CONFIG_PATHS = [
    "/etc/desktop2mqtt/config.yaml",
    "~/.config/desktop2mqtt/config.yaml",
    "config.yaml",
]


def find_config_file() -> Optional[str]:
    """Return the first existing default config file, if any."""
    for path in DEFAULT_CONFIG_PATHS:
        expanded = Path(path).expanduser()
        if expanded.exists():
            return str(expanded)
    return None


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = argparse.ArgumentParser(
        prog="desktop2mqtt",
        description="Linux desktop to Home Assistant MQTT bridge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Environment variables (no config file needed):
  MQTT_HOST=192.168.1.100 MQTT_USERNAME=user MQTT_PASSWORD=pass desktop2mqtt

  # Config file:
  desktop2mqtt -c ~/.config/desktop2mqtt/config.yaml
  desktop2mqtt --generate-config > config.yaml
        """,
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (optional if using env vars)",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Print default configuration and exit",
    )
    parser.add_argument(
        "--env-help",
        action="store_true",
        help="Print environment variable help and exit",
    )

    args = parser.parse_args()

    if args.generate_config:
        print(create_default_config())
        return 0

    if args.env_help:
        print(print_env_help())
        return 0

    config_path = args.config
    using_env = os.environ.get("MQTT_HOST") is not None

    if config_path and not Path(config_path).exists():
        print(f"Error: Configuration file not found: {config_path}", file=sys.stderr)
        return 1

    if not config_path and not using_env:
        config_path = find_config_file()

    if config_path:
        print(f"Using configuration file: {config_path}")
    elif using_env:
        print(f"Using environment variable configuration (MQTT_HOST={os.environ.get('MQTT_HOST')})")
    else:
        print("No configuration found, using defaults (broker at localhost:1883)")
        print("For environment variable help: desktop2mqtt --env-help")

    try:
        asyncio.run(run_app(config_path))
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
