# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Declarative building blocks for Conframe commands.

A command is a `BaseCommand` subclass decorated with `@command(...)`. Its
arguments are class attributes created with `argument(...)`; the attribute's
annotation is the target type the raw token is coerced to:

    @command("greet", "hi", description="Greets someone")
    class Greet(BaseCommand):
        name: str = argument(required=True, description="Who to greet")
        times: int = argument(description="How many times")
        shout: bool = argument()

        def evaluate(self) -> None:
            ...

`evaluate` may be a plain method or a coroutine function. Commands receive
their collaborators through `__init__`; see `conframe.factory`.
"""
from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar, get_type_hints

from conframe.coercion import zero_default
from conframe.descriptors import MISSING, CommandDescriptor
from conframe.exceptions import SchemaError

C = TypeVar("C", bound=type)


class BaseCommand(ABC):
    """Base class for every command that can be registered and executed."""

    @abstractmethod
    def evaluate(self) -> Any:
        """Run the command. May be declared `async def`."""
        raise NotImplementedError("evaluate must be implemented by subclasses")


class Argument:
    """
    Data descriptor for one argument slot on a command class.

    Reading a slot that was never bound returns its default: the explicit
    `default` when one was given, otherwise the zero default of the annotated
    type (0 for int, None for nullable types, ...).
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        required: bool = False,
        description: str = "",
        default: Any = MISSING,
        example: Any = MISSING,
    ) -> None:
        self.name: str | None = name
        self.required: bool = required
        self.description: str = description
        self.default: Any = default
        self.example: Any = example
        self.attribute: str = ""

    def __set_name__(self, owner: type, attribute: str) -> None:
        self.attribute = attribute
        if not self.name:
            self.name = attribute

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.attribute]
        except KeyError:
            return self.default_for(type(instance))

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.attribute] = value

    def target_type(self, owner: type) -> Any:
        """Resolve the annotated type of this slot on `owner` (str if unannotated)."""
        try:
            hints = get_type_hints(owner)
        except NameError as error:
            raise SchemaError(
                f"Cannot resolve the type of argument '{self.name}' on "
                f"{owner.__qualname__}: {error}"
            ) from error
        return hints.get(self.attribute, str)

    def default_for(self, owner: type) -> Any:
        if self.default is not MISSING:
            return self.default
        return zero_default(self.target_type(owner))

    def __repr__(self) -> str:
        return (
            f"Argument(name={self.name!r}, required={self.required}, "
            f"default={self.default!r})"
        )


def argument(
    name: str | None = None,
    *,
    required: bool = False,
    description: str = "",
    default: Any = MISSING,
    example: Any = MISSING,
) -> Any:
    """
    Declare an argument slot on a command class.

    Args:
        name (str | None): Slot name used for `--name=value`. Defaults to the
            attribute name.
        required (bool): Fail binding when no value is supplied.
        description (str): Help text.
        default (Any): Value when the slot is not bound.
        example (Any): Example value shown in help usage lines.
    """
    return Argument(
        name,
        required=required,
        description=description,
        default=default,
        example=example,
    )


def command(*names: str, description: str = "") -> Callable[[C], C]:
    """Class decorator attaching a `CommandDescriptor` to a command type."""

    def decorator(cls: C) -> C:
        cls.__command__ = CommandDescriptor(
            names=names, description=description, command_type=cls
        )
        return cls

    return decorator


def get_command_descriptor(command_type: type) -> CommandDescriptor | None:
    """Return the descriptor declared on `command_type` itself, not inherited."""
    descriptor = vars(command_type).get("__command__")
    if isinstance(descriptor, CommandDescriptor):
        return descriptor
    return None


def is_invocable(command_type: type) -> bool:
    """Check that `command_type` is a concrete `BaseCommand` with `evaluate`."""
    return (
        isinstance(command_type, type)
        and issubclass(command_type, BaseCommand)
        and not inspect.isabstract(command_type)
        and callable(getattr(command_type, "evaluate", None))
    )


def declared_arguments(command_type: type) -> list[Argument]:
    """
    List the argument slots of `command_type` in declaration order.

    Slots from base classes come first; a subclass redefining an attribute
    keeps the base class position.
    """
    slots: dict[str, Argument] = {}
    for klass in reversed(command_type.__mro__):
        for attribute, value in vars(klass).items():
            if isinstance(value, Argument):
                slots[attribute] = value
    return list(slots.values())
