# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Conframe CLI framework.

Registration-time errors (`SchemaError`, `DuplicateNameError`,
`DependencyError`) describe a programming mistake in how commands are declared
or wired; they propagate to whoever registers commands and should abort startup.

Resolution-time errors derive from `CommandResolutionError`. They describe bad
user input, carry a message meant to be shown to the end user as-is, and are
caught by the interactive loop, which reports them and keeps running.

Exception Hierarchy:
- ConframeError
    ├── SchemaError
    ├── DuplicateNameError
    ├── DependencyError
    └── CommandResolutionError
        ├── UnknownCommandError
        ├── MissingArgumentError
        └── FormatError
"""
from __future__ import annotations


class ConframeError(Exception):
    """Base exception for the Conframe framework."""


class SchemaError(ConframeError):
    """Raised when a command type is malformed or cannot be registered."""


class DuplicateNameError(ConframeError):
    """Raised when a command alias is already registered to a different type."""

    def __init__(self, name: str, existing: type, new: type):
        self.name = name
        self.existing = existing
        self.new = new
        super().__init__(
            f"Command name '{name}' of {new.__qualname__} is already registered "
            f"to {existing.__qualname__}"
        )


class DependencyError(ConframeError):
    """Raised when a command's constructor dependencies cannot be satisfied."""


class CommandResolutionError(ConframeError):
    """Base class for errors caused by user input during command resolution."""


class UnknownCommandError(CommandResolutionError):
    """Raised when the input names a command that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command '{name}'")


class MissingArgumentError(CommandResolutionError):
    """Raised when a required argument found no value."""

    def __init__(self, argument: str, command: str):
        self.argument = argument
        self.command = command
        super().__init__(
            f"Missing required argument '{argument}' for command '{command}'"
        )


class FormatError(CommandResolutionError):
    """Raised when a raw value cannot be coerced to its argument's type."""

    def __init__(self, argument: str, command: str, value: str, reason: str = ""):
        self.argument = argument
        self.command = command
        self.value = value
        self.reason = reason
        message = (
            f"Invalid format for value '{value}' of argument '{argument}' "
            f"in command '{command}'"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
