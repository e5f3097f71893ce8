"""``trusted-clients`` command group."""

from __future__ import annotations

from privx_cli.cli.commands import Command, CommandGroup
from privx_cli.cli.output import print_json
from privx_cli.trusted_clients import (
    download_preconfiguration,
    list_trusted_clients,
    parse_client_kind,
    resolve_ca_operations,
)


def _add_type(parser, choices: str) -> None:
    parser.add_argument("--type", dest="client_type", required=True, help=f"Client type: {choices}")


def _add_client_id(parser) -> None:
    parser.add_argument("--client-id", required=True, help="Trusted client ID")


def _add_file_name(parser) -> None:
    parser.add_argument("--name", dest="file_name", required=True, help="Destination file name")


def _configure_list(parser) -> None:
    _add_type(parser, "extender | webproxy | carrier")


def _configure_list_ca(parser) -> None:
    _add_type(parser, "extender | webproxy")
    parser.add_argument("--group-id", default=None, help="Access group ID filter")


def _configure_show_ca(parser) -> None:
    _add_client_id(parser)
    _add_type(parser, "extender | webproxy")


def _configure_show_crl(parser) -> None:
    _add_client_id(parser)
    _add_type(parser, "extender | webproxy")
    _add_file_name(parser)


def _configure_pre_config(parser) -> None:
    _add_client_id(parser)
    _add_type(parser, "extender | webproxy | carrier")
    _add_file_name(parser)


def _run_list(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, list_trusted_clients(client, args.client_type))


def _run_show(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, client.trusted_client(args.client_id))


def _run_list_ca(*, args, client, stdout, stderr) -> int:
    operations = resolve_ca_operations(args.client_type)
    return print_json(stdout, operations.list_certificates(client, args.group_id))


def _run_show_ca(*, args, client, stdout, stderr) -> int:
    operations = resolve_ca_operations(args.client_type)
    return print_json(stdout, operations.show_certificate(client, args.client_id))


def _run_show_crl(*, args, client, stdout, stderr) -> int:
    operations = resolve_ca_operations(args.client_type)
    output_path = operations.download_crl(client, args.file_name, args.client_id)
    return print_json(
        stdout,
        {
            "client_id": args.client_id,
            "type": parse_client_kind(args.client_type),
            "output_file": str(output_path),
        },
    )


def _run_pre_config(*, args, client, stdout, stderr) -> int:
    output_path = download_preconfiguration(
        client, args.client_type, args.client_id, args.file_name
    )
    return print_json(
        stdout,
        {
            "client_id": args.client_id,
            "type": parse_client_kind(args.client_type),
            "output_file": str(output_path),
        },
    )


TRUSTED_CLIENT_COMMANDS = CommandGroup(
    name="trusted-clients",
    help="List trusted clients and download pre-configurations",
    commands=(
        Command("list", "List trusted clients of a type", _run_list, _configure_list),
        Command("show", "Get trusted client by ID", _run_show, _add_client_id),
        Command(
            "list-ca",
            "List extender or web-proxy CA certificates",
            _run_list_ca,
            _configure_list_ca,
        ),
        Command(
            "show-ca",
            "Get extender or web-proxy CA certificate",
            _run_show_ca,
            _configure_show_ca,
        ),
        Command(
            "show-crl",
            "Download extender or web-proxy revocation list",
            _run_show_crl,
            _configure_show_crl,
        ),
        Command(
            "pre-config",
            "Download pre-configuration for an extender, web-proxy or carrier",
            _run_pre_config,
            _configure_pre_config,
        ),
    ),
)
