# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Data model shared by the command resolution pipeline.

- `CommandDescriptor`: immutable metadata for one command type (aliases,
  description, implementing type). Attached by `@command` and owned by
  `CommandRegistry` once registered.
- `ArgumentDescriptor`: one declared argument slot with its resolved target type.
- `ArgumentSchema`: the ordered slots of a command type, stably partitioned into
  required and optional slots. Derived once per type by `conframe.schema`.
- `TokenSet`: the classified tokens of a single invocation.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class _Missing:
    """Sentinel for "no value given", distinct from None."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class CommandDescriptor(BaseModel):
    """
    Metadata for a command type.

    Attributes:
        names (tuple[str, ...]): Aliases the command answers to. The first one is
            the primary name used in messages and help.
        description (str): Short description shown in help listings.
        command_type (type | None): The implementing `BaseCommand` subclass.
    """

    names: tuple[str, ...]
    description: str = ""
    command_type: type | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("names", mode="before")
    @classmethod
    def wrap_single_name(cls, names: Any) -> Any:
        if isinstance(names, str):
            return (names,)
        return names

    @property
    def primary_name(self) -> str:
        return self.names[0] if self.names else ""


@dataclass(frozen=True)
class ArgumentDescriptor:
    """
    Represents one declared argument slot of a command.

    Attributes:
        name (str): Slot name, matched against `--name=value` tokens.
        attribute (str): Attribute of the command instance the value is written to.
        type (Any): Target type the raw string is coerced to.
        required (bool): Whether binding fails when no value is found.
        description (str): Help text for the argument.
        default (Any): Value of the slot when nothing binds to it.
        example (Any): Example value for help output, or MISSING.
    """

    name: str
    attribute: str
    type: Any = str
    required: bool = False
    description: str = ""
    default: Any = None
    example: Any = MISSING


@dataclass(frozen=True)
class ArgumentSchema:
    """Ordered argument slots of one command type."""

    command_name: str
    arguments: tuple[ArgumentDescriptor, ...] = ()
    required: tuple[ArgumentDescriptor, ...] = ()
    optional: tuple[ArgumentDescriptor, ...] = ()

    @classmethod
    def from_arguments(
        cls, command_name: str, arguments: list[ArgumentDescriptor]
    ) -> ArgumentSchema:
        """Build a schema, keeping declaration order inside each partition."""
        return cls(
            command_name=command_name,
            arguments=tuple(arguments),
            required=tuple(argument for argument in arguments if argument.required),
            optional=tuple(argument for argument in arguments if not argument.required),
        )

    def get(self, name: str) -> ArgumentDescriptor | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def __len__(self) -> int:
        return len(self.arguments)


@dataclass
class TokenSet:
    """Positional values in input order plus named values keyed by slot name."""

    positional: deque[str] = field(default_factory=deque)
    named: dict[str, str] = field(default_factory=dict)

    def take(self, name: str) -> str | None:
        """
        Consume the value for slot `name`.

        A named value wins and is removed so it cannot satisfy another slot;
        otherwise the next positional value is dequeued. Returns None when both
        sources are exhausted.
        """
        if name in self.named:
            return self.named.pop(name)
        if self.positional:
            return self.positional.popleft()
        return None

    def is_empty(self) -> bool:
        return not self.positional and not self.named
