# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lookup table from command names to command types.

Names are matched case-insensitively. Every alias of a command maps to the same
type, so `list_all()` returns one entry per alias; use `unique()` for one entry
per command.
"""
from __future__ import annotations

from conframe.command import get_command_descriptor, is_invocable
from conframe.descriptors import CommandDescriptor
from conframe.exceptions import DuplicateNameError, SchemaError, UnknownCommandError
from conframe.logger import logger
from conframe.schema import get_schema
from conframe.utils import CaseInsensitiveDict


class CommandRegistry:
    """Registry of command types keyed by lower-cased name and alias."""

    def __init__(self) -> None:
        self._commands: dict[str, type] = CaseInsensitiveDict()
        self._descriptors: dict[type, CommandDescriptor] = {}

    def register(
        self, command_type: type, descriptor: CommandDescriptor | None = None
    ) -> CommandDescriptor:
        """
        Register `command_type` under every name of its descriptor.

        Args:
            command_type (type): A concrete `BaseCommand` subclass.
            descriptor (CommandDescriptor | None): Metadata to register with.
                Defaults to the descriptor attached by `@command`.

        Returns:
            CommandDescriptor: The descriptor stored for the type.

        Raises:
            SchemaError: Missing metadata, empty name, not an invocable command,
                or malformed argument slots.
            DuplicateNameError: A name is already registered to another type.
        """
        if not isinstance(command_type, type):
            raise SchemaError(f"Expected a command class, got {command_type!r}")

        descriptor = descriptor or get_command_descriptor(command_type)
        if descriptor is None:
            raise SchemaError(
                f"Type {command_type.__qualname__} must be decorated with @command"
            )
        if not is_invocable(command_type):
            raise SchemaError(
                f"Type {command_type.__qualname__} must subclass BaseCommand "
                "and implement evaluate()"
            )
        if not descriptor.names:
            raise SchemaError(
                f"Command {command_type.__qualname__} must declare at least one name"
            )
        for name in descriptor.names:
            if not isinstance(name, str) or not name.strip():
                raise SchemaError(
                    f"Command {command_type.__qualname__} must have non-empty name(s)"
                )

        for name in descriptor.names:
            existing = self._commands.get(name)
            if existing is not None and existing is not command_type:
                raise DuplicateNameError(name.lower(), existing, command_type)

        get_schema(command_type)

        if descriptor.command_type is not command_type:
            descriptor = descriptor.model_copy(update={"command_type": command_type})

        for name in descriptor.names:
            self._commands[name] = command_type
        self._descriptors[command_type] = descriptor
        logger.debug(
            "Registered command %s as %s",
            command_type.__qualname__,
            ", ".join(descriptor.names),
        )
        return descriptor

    def resolve(self, name: str) -> type:
        """Return the command type registered under `name` (case-insensitive)."""
        command_type = self._commands.get(name)
        if command_type is None:
            raise UnknownCommandError(name)
        return command_type

    def list_all(self) -> list[type]:
        """Return the registered type of every name, duplicates included."""
        return list(self._commands.values())

    def unique(self) -> list[type]:
        """Return each registered type once, in registration order."""
        return list(dict.fromkeys(self._commands.values()))

    def descriptor_for(self, command_type: type) -> CommandDescriptor:
        try:
            return self._descriptors[command_type]
        except KeyError:
            raise UnknownCommandError(command_type.__qualname__) from None

    def names(self) -> list[str]:
        return list(self._commands.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
