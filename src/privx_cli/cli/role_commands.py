"""``roles`` command group."""

from __future__ import annotations

from privx_cli.cli.commands import Command, CommandGroup
from privx_cli.cli.inputs import load_json_body
from privx_cli.cli.output import EXIT_SERVICE_ERROR, EXIT_SUCCESS, print_error, print_json
from privx_cli.errors import ServiceRequestError
from privx_cli.models import RoleDefinition, RoleUpdate
from privx_cli.roles import (
    collect_role_members,
    delete_roles,
    resolve_role_names,
    split_identifiers,
)

DEFAULT_AWS_TOKEN_TTL = 50


def _add_role_id(parser, help_text: str = "role ID") -> None:
    parser.add_argument("--id", dest="role_id", required=True, help=help_text)


def _add_json_file(parser) -> None:
    parser.add_argument("json_file", metavar="JSON-FILE", help="Role definition JSON file")


def _configure_update(parser) -> None:
    _add_json_file(parser)
    _add_role_id(parser)


def _configure_resolve(parser) -> None:
    parser.add_argument(
        "--name",
        dest="role_names",
        required=True,
        help="Role names, comma separated for multiple values",
    )


def _configure_aws_token(parser) -> None:
    _add_role_id(parser)
    parser.add_argument("--mfa", default=None, help="Multi-factor authentication code")
    parser.add_argument(
        "--ttl",
        type=int,
        default=DEFAULT_AWS_TOKEN_TTL,
        help=f"Max validity for the token (default: {DEFAULT_AWS_TOKEN_TTL})",
    )


def _run_roles_list(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, client.roles())


def _run_roles_create(*, args, client, stdout, stderr) -> int:
    body = load_json_body(args.json_file, RoleDefinition)
    return print_json(stdout, client.create_role(body))


def _run_roles_show(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, client.role(args.role_id))


def _run_roles_update(*, args, client, stdout, stderr) -> int:
    body = load_json_body(args.json_file, RoleUpdate)
    client.update_role(args.role_id, body)
    return EXIT_SUCCESS


def _run_roles_delete(*, args, client, stdout, stderr) -> int:
    delete_roles(
        client,
        split_identifiers(args.role_id),
        on_deleted=lambda role_id: print(role_id, file=stdout, flush=True),
    )
    return EXIT_SUCCESS


def _run_roles_members(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, collect_role_members(client, split_identifiers(args.role_id)))


def _run_roles_resolve(*, args, client, stdout, stderr) -> int:
    return print_json(stdout, resolve_role_names(client, split_identifiers(args.role_names)))


def _run_roles_aws_token(*, args, client, stdout, stderr) -> int:
    try:
        token = client.aws_token(args.role_id, args.mfa, args.ttl)
    except ServiceRequestError as exc:
        if not exc.is_forbidden:
            raise
        hint = (
            "the role may require an MFA code (retry with --mfa) or the user lacks the role"
            if not args.mfa
            else "the MFA code was rejected or the user does not have the role"
        )
        return print_error(
            stderr, f"service error ({exc.category})", f"{exc} ({hint})", code=EXIT_SERVICE_ERROR
        )
    return print_json(stdout, token)


ROLE_COMMANDS = CommandGroup(
    name="roles",
    help="List and manage roles",
    commands=(
        Command(None, "List roles", _run_roles_list),
        Command("create", "Create new role", _run_roles_create, _add_json_file),
        Command("show", "Get role by ID", _run_roles_show, _add_role_id),
        Command("update", "Update role", _run_roles_update, _configure_update),
        Command(
            "delete",
            "Delete roles, IDs comma separated",
            _run_roles_delete,
            lambda parser: _add_role_id(parser, "Role IDs, comma separated for multiple values"),
        ),
        Command(
            "members",
            "Get members of roles",
            _run_roles_members,
            lambda parser: _add_role_id(parser, "Role IDs, comma separated for multiple values"),
        ),
        Command(
            "resolve",
            "Resolve role names to IDs",
            _run_roles_resolve,
            _configure_resolve,
        ),
        Command(
            "aws-token",
            "Get an AWS token for a role",
            _run_roles_aws_token,
            _configure_aws_token,
        ),
    ),
)
