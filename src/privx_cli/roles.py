"""Batch helpers for role-store operations addressed by comma-separated lists."""

from __future__ import annotations

from typing import Callable, Iterable


def split_identifiers(value: str) -> list[str]:
    return [token.strip() for token in value.split(",") if token.strip()]


def delete_roles(
    client,
    role_ids: Iterable[str],
    *,
    on_deleted: Callable[[str], None] | None = None,
) -> list[str]:
    """Delete roles left to right, stopping at the first failure.

    Roles deleted before the failure stay deleted; the error propagates.
    """
    deleted: list[str] = []
    for role_id in role_ids:
        client.delete_role(role_id)
        deleted.append(role_id)
        if on_deleted is not None:
            on_deleted(role_id)
    return deleted


def collect_role_members(client, role_ids: Iterable[str]) -> list:
    members: list = []
    for role_id in role_ids:
        members.extend(client.get_role_members(role_id))
    return members


def resolve_role_names(client, names: list[str]) -> list:
    return client.resolve_roles(list(names))
