# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Built-in `help` command.

Without arguments it lists every registered command with its aliases and
description. With `help <name>` (or `help --c=<name>`) it shows the arguments
of one command and an example invocation:

    greet, hi: Greets someone

      Arguments:
        --name (required): str | Who to greet
        --times (optional): int

    Example usage: greet "example string" [--times=42]
"""
from __future__ import annotations

from enum import EnumMeta
from typing import Literal, get_args, get_origin

from rich.console import Console
from rich.markup import escape

from conframe.coercion import describe_type, unwrap_optional
from conframe.command import BaseCommand, argument, command
from conframe.console import console as default_console
from conframe.descriptors import MISSING, ArgumentDescriptor, ArgumentSchema
from conframe.exceptions import UnknownCommandError
from conframe.registry import CommandRegistry
from conframe.schema import get_schema
from conframe.themes import OneColors


def example_value(argument_descriptor: ArgumentDescriptor) -> str:
    """Return a sample raw value for an argument, used in usage lines."""
    if argument_descriptor.example is not MISSING:
        return str(argument_descriptor.example)

    target_type, _ = unwrap_optional(argument_descriptor.type)
    if target_type is bool:
        return "true"
    if target_type is int:
        return "42"
    if target_type is float:
        return "3.14"
    if isinstance(target_type, EnumMeta):
        return next(iter(target_type)).name
    if get_origin(target_type) is Literal:
        return str(get_args(target_type)[0])
    return '"example string"'


def example_usage(name: str, schema: ArgumentSchema) -> str:
    parts = [name]
    for argument_descriptor in schema.arguments:
        value = example_value(argument_descriptor)
        if argument_descriptor.required:
            parts.append(value)
        else:
            parts.append(f"[--{argument_descriptor.name}={value}]")
    return " ".join(parts)


@command("help", "h", description="Displays help information for available commands")
class HelpCommand(BaseCommand):
    command_name: str | None = argument(
        "c", description="Name of command to display help about"
    )

    def __init__(self, registry: CommandRegistry, console: Console = default_console):
        self.registry = registry
        self.console = console

    def evaluate(self) -> None:
        if not self.command_name or not self.command_name.strip():
            self.render_command_list()
            return

        try:
            command_type = self.registry.resolve(self.command_name)
        except UnknownCommandError:
            self.console.print(
                f"[{OneColors.LIGHT_YELLOW}]Unknown command : "
                f"'{escape(self.command_name)}'[/]"
            )
            return
        self.render_command_help(command_type)

    def render_command_list(self) -> None:
        self.console.print("Available commands:")
        for command_type in self.registry.unique():
            descriptor = self.registry.descriptor_for(command_type)
            names = escape(", ".join(descriptor.names))
            self.console.print(
                f"  [{OneColors.CYAN_b}]{names}[/]: {escape(descriptor.description)}"
            )

    def render_command_help(self, command_type: type) -> None:
        descriptor = self.registry.descriptor_for(command_type)
        schema = get_schema(command_type)
        names = escape(", ".join(descriptor.names))
        self.console.print(
            f"[{OneColors.CYAN_b}]{names}[/]: {escape(descriptor.description)}\n"
        )
        if not schema.arguments:
            return

        self.console.print("  Arguments:")
        for argument_descriptor in schema.arguments:
            self.console.print(self._format_argument(argument_descriptor))

        usage = example_usage(descriptor.primary_name, schema)
        self.console.print(f"\nExample usage: {escape(usage)}", highlight=False)

    def _format_argument(self, argument_descriptor: ArgumentDescriptor) -> str:
        requiredness = "required" if argument_descriptor.required else "optional"
        line = (
            f"    [{OneColors.BLUE}]--{escape(argument_descriptor.name)}[/] "
            f"({requiredness}): {escape(describe_type(argument_descriptor.type))}"
        )
        if argument_descriptor.description.strip():
            line += f" | {escape(argument_descriptor.description)}"
        return line

    def __repr__(self) -> str:
        return f"HelpCommand(command_name={self.command_name!r})"
