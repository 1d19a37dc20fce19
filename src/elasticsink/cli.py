"""elasticsink CLI: check a sink configuration before deploying it.

Usage:
    elasticsink check -c sink.yaml         # Validate a YAML config file
    elasticsink check                      # Validate ELASTICSINK_* env vars
    elasticsink check -c sink.yaml --json  # Print resolved settings as JSON
    elasticsink options                    # List recognized options
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

from .config import ALL_OPTIONS, Configuration, ElasticsearchConfiguration, SinkSettings
from .config.store import DEFAULT_ENV_PREFIX, env_var_name
from .errors import ConfigurationValidationError
from .units import MemorySize, format_duration

logger = logging.getLogger(__name__)

_MASK = "******"


def _settings_to_dict(settings: SinkSettings) -> dict[str, Any]:
    data = asdict(settings)
    data["hosts"] = [host.to_uri() for host in settings.hosts]
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
    if data["password"] is not None:
        data["password"] = _MASK
    return data


def _format_default(value: Any) -> str:
    if value is None:
        return "(none)"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, MemorySize):
        return str(value)
    if isinstance(value, timedelta):
        return format_duration(value)
    return str(value)


def _load_configuration(args: argparse.Namespace) -> Configuration:
    if args.config:
        logger.debug("Loading configuration from %s", args.config)
        return Configuration.from_file(args.config)
    logger.debug("Loading configuration from %s_* environment variables", args.env_prefix)
    return Configuration.from_env(prefix=args.env_prefix)


def cmd_check(args: argparse.Namespace) -> int:
    """Validate a configuration and print the resolved settings."""
    try:
        raw = _load_configuration(args)
        for key in raw.unknown_keys():
            logger.warning("Ignoring unrecognized option '%s'", key)

        config = ElasticsearchConfiguration(raw)
        config.validate()
        settings = config.to_sink_settings()
    except ConfigurationValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    data = _settings_to_dict(settings)
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        print("✅ Configuration is valid.")
        for key, value in data.items():
            if value is not None:
                print(f"   {key}: {value}")
    return 0


def cmd_options(args: argparse.Namespace) -> int:
    """Print every recognized option."""
    for option in ALL_OPTIONS:
        print(f"{option.key} ({option.type.value}, default: {_format_default(option.default)})")
        print(f"   env: {env_var_name(option.key, args.env_prefix)}")
        if option.enum_class is not None:
            choices = ", ".join(str(member.value) for member in option.enum_class)
            print(f"   choices: {choices}")
        if option.description:
            print(f"   {option.description}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    # Shared by every subcommand so the flags can follow the command name
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", type=str, default="warning",
                        choices=["debug", "info", "warning", "error"])
    common.add_argument("--env-prefix", type=str, default=DEFAULT_ENV_PREFIX,
                        help=f"Environment variable prefix (default: {DEFAULT_ENV_PREFIX})")

    parser = argparse.ArgumentParser(
        prog="elasticsink",
        description="Resolve and validate Elasticsearch sink configuration",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check
    check_parser = subparsers.add_parser(
        "check", parents=[common], help="Validate a configuration and print the resolved settings"
    )
    check_parser.add_argument("--config", "-c", type=str, default=None,
                              help="YAML config file (default: read environment)")
    check_parser.add_argument("--json", action="store_true",
                              help="Print resolved settings as JSON")

    # options
    subparsers.add_parser(
        "options", parents=[common], help="List recognized configuration options")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "check":
        sys.exit(cmd_check(args))
    else:
        sys.exit(cmd_options(args))


if __name__ == "__main__":
    main()
