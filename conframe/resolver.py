# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns raw user input into a bound, ready-to-run command instance.

    line/argv -> tokens -> command type -> schema -> new instance -> bind

`resolve_from_line` is used by the interactive loop; `resolve_from_argv` by
single-shot invocation, where the shell has already split the input.
"""
from __future__ import annotations

from typing import Any, Sequence

from conframe.binder import ArgumentBinder
from conframe.exceptions import UnknownCommandError
from conframe.factory import CommandFactory
from conframe.logger import logger
from conframe.registry import CommandRegistry
from conframe.schema import get_schema
from conframe.tokenizer import tokenize


class CommandResolver:
    """Resolves input into command instances using a registry and a factory."""

    def __init__(
        self,
        registry: CommandRegistry,
        factory: CommandFactory | None = None,
        binder: ArgumentBinder | None = None,
    ) -> None:
        self.registry: CommandRegistry = registry
        self.factory: CommandFactory = factory or CommandFactory()
        self.binder: ArgumentBinder = binder or ArgumentBinder()

    def resolve_from_line(self, line: str) -> Any:
        """Tokenize `line` and resolve it."""
        return self.resolve_from_argv(tokenize(line))

    def resolve_from_argv(self, argv: Sequence[str]) -> Any:
        """
        Resolve an already split input; the first element is the command name.

        Raises:
            UnknownCommandError: Empty input or unregistered command name.
            MissingArgumentError: A required argument found no value.
            FormatError: A value could not be coerced.
            DependencyError: A constructor parameter could not be filled.
        """
        if not argv or not argv[0]:
            raise UnknownCommandError(argv[0] if argv else "")

        name, *arguments = argv
        command_type = self.registry.resolve(name)
        command_name = self.registry.descriptor_for(command_type).primary_name
        schema = get_schema(command_type)
        command = self.factory.create(command_type)
        logger.debug("[%s] Binding %d token(s)", command_name, len(arguments))
        return self.binder.bind(schema, arguments, command, command_name)
