"""Command descriptors and the argparse router built from them."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Callable, Sequence

Handler = Callable[..., int]


def _no_arguments(parser: argparse.ArgumentParser) -> None:
    return None


@dataclass(frozen=True)
class Command:
    """One sub-command: ``name`` None marks the group's default action."""

    name: str | None
    help: str
    run: Handler
    configure: Callable[[argparse.ArgumentParser], None] = _no_arguments


@dataclass(frozen=True)
class CommandGroup:
    name: str
    help: str
    commands: Sequence[Command] = field(default_factory=tuple)

    @property
    def dest(self) -> str:
        return f"{self.name.replace('-', '_')}_command"

    def default(self) -> Command | None:
        for command in self.commands:
            if command.name is None:
                return command
        return None


class Router:
    """Parser plus handler lookup, built once from an explicit list of groups."""

    def __init__(self, parser: argparse.ArgumentParser, groups: Sequence[CommandGroup]) -> None:
        self.parser = parser
        self._groups = {group.name: group for group in groups}

    def resolve(self, args: argparse.Namespace) -> Command | None:
        group = self._groups.get(args.command)
        if group is None:
            return None
        name = getattr(args, group.dest, None)
        if name is None:
            return group.default()
        for command in group.commands:
            if command.name == name:
                return command
        return None


def build_router(
    parser: argparse.ArgumentParser,
    subparsers: argparse._SubParsersAction,
    groups: Sequence[CommandGroup],
) -> Router:
    for group in groups:
        group_parser = subparsers.add_parser(group.name, help=group.help)
        named = [command for command in group.commands if command.name is not None]
        default = group.default()
        if default is not None:
            default.configure(group_parser)
        if named:
            group_sub = group_parser.add_subparsers(dest=group.dest, required=default is None)
            for command in named:
                command_parser = group_sub.add_parser(command.name, help=command.help)
                command.configure(command_parser)
    return Router(parser, groups)
