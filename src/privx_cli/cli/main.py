"""Command-line interface for privx-cli."""

from __future__ import annotations

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Sequence

from privx_cli.cli.commands import Command, CommandGroup, Router, build_router
from privx_cli.cli.config import CLIConfig, ConfigError, load_cli_config
from privx_cli.cli.inputs import InputError
from privx_cli.cli.logging_config import configure_logging
from privx_cli.cli.output import (
    EXIT_IO_ERROR,
    EXIT_SERVICE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    print_error,
)
from privx_cli.cli.role_commands import ROLE_COMMANDS
from privx_cli.cli.trusted_client_commands import TRUSTED_CLIENT_COMMANDS
from privx_cli.client import PrivXClient
from privx_cli.errors import (
    InvalidResponseError,
    LocalFileError,
    ServiceRequestError,
    ServiceUnavailableError,
    UnknownClientTypeError,
)

COMMAND_GROUPS: tuple[CommandGroup, ...] = (ROLE_COMMANDS, TRUSTED_CLIENT_COMMANDS)


def _sdk_version() -> str:
    try:
        return pkg_version("privx-cli")
    except PackageNotFoundError:
        return "0.0.0+local"


def build_cli(groups: Sequence[CommandGroup] = COMMAND_GROUPS) -> Router:
    parser = argparse.ArgumentParser(prog="privx-cli")
    parser.add_argument(
        "--version",
        action="version",
        version=f"privx-cli {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.privx_cli/config.toml)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Service base URL override (default from config)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Write debug logs to stderr",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help="Show CLI version")
    version.add_argument("--json", action="store_true", help="Print version details as JSON")

    return build_router(parser, sub, groups)


def _run_version(*, config: CLIConfig, as_json: bool, stdout) -> int:
    payload = {
        "cli": "privx-cli",
        "version": _sdk_version(),
        "base_url": config.base_url,
    }
    if as_json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
    else:
        print(f"privx-cli {payload['version']}", file=stdout)
        print(f"base url: {payload['base_url']}", file=stdout)
    return EXIT_SUCCESS


def _build_client(*, base_url: str, config: CLIConfig) -> PrivXClient:
    return PrivXClient(
        base_url=base_url,
        api_token=config.api_token,
        timeout=config.timeout,
        retries=config.retries,
    )


def _run_command(command: Command, *, args, client, stdout, stderr) -> int:
    try:
        return command.run(args=args, client=client, stdout=stdout, stderr=stderr)
    except UnknownClientTypeError as exc:
        return print_error(stderr, "validation error", str(exc), code=EXIT_VALIDATION_ERROR)
    except InputError as exc:
        return print_error(stderr, "input error", str(exc), code=EXIT_VALIDATION_ERROR)
    except LocalFileError as exc:
        return print_error(stderr, "file error", str(exc), code=EXIT_IO_ERROR)
    except ServiceRequestError as exc:
        return print_error(
            stderr, f"service error ({exc.category})", str(exc), code=EXIT_SERVICE_ERROR
        )
    except (ServiceUnavailableError, InvalidResponseError) as exc:
        return print_error(stderr, "service error", str(exc), code=EXIT_SERVICE_ERROR)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout=sys.stdout,
    stderr=sys.stderr,
    router: Router | None = None,
) -> int:
    router = router or build_cli()
    args = router.parser.parse_args(argv)

    configure_logging(stderr, verbose=args.verbose)

    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    if args.command == "version":
        return _run_version(config=config, as_json=args.json, stdout=stdout)

    command = router.resolve(args)
    if command is None:
        print("unknown command", file=stderr)
        return EXIT_VALIDATION_ERROR

    client = _build_client(base_url=args.base_url or config.base_url, config=config)
    return _run_command(command, args=args, client=client, stdout=stdout, stderr=stderr)


if __name__ == "__main__":
    raise SystemExit(main())
