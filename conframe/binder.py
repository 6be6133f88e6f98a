# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binds raw tokens to the argument slots of a command instance.

Binding runs in four steps:

1. Classify: `--name=value` and `--name` tokens become named values (a bare
   `--name` means `"true"`); everything else is queued as a positional value.
   Surrounding double quotes are stripped from values.
2. Required slots, in declaration order: take the named value if present
   (consuming it), else the next positional value. A slot left without a value
   raises `MissingArgumentError`.
3. Optional slots, in declaration order, with the same policy. A slot left
   without a value keeps its default.
4. Each value is coerced to the slot type and written to the instance.

Required slots are resolved before optional ones, so a required slot may take
a positional value that precedes an optional slot in declaration order.
An empty value (`--name=` or `""`) counts as no value.
"""
from __future__ import annotations

from typing import Any, Sequence

from conframe.coercion import coerce_value
from conframe.descriptors import ArgumentDescriptor, ArgumentSchema, TokenSet
from conframe.exceptions import FormatError, MissingArgumentError
from conframe.logger import logger
from conframe.tokenizer import strip_quotes

NAMED_PREFIX = "--"
FLAG_VALUE = "true"


def classify_tokens(tokens: Sequence[str]) -> TokenSet:
    """Split raw tokens into positional and named values."""
    token_set = TokenSet()
    for token in tokens:
        if token.startswith(NAMED_PREFIX):
            name, separator, value = token[len(NAMED_PREFIX) :].partition("=")
            if name:
                if name in token_set.named:
                    logger.warning(
                        "Argument '--%s' given more than once, using the last value.",
                        name,
                    )
                token_set.named[name] = strip_quotes(value) if separator else FLAG_VALUE
                continue
            # A bare "--" has no name and is kept as a positional value, not a flag.
        token_set.positional.append(strip_quotes(token))
    return token_set


class ArgumentBinder:
    """Resolves and coerces token values into the argument slots of a command."""

    def bind(
        self,
        schema: ArgumentSchema,
        tokens: Sequence[str],
        command: Any,
        command_name: str | None = None,
    ) -> Any:
        """
        Populate `command` from `tokens` according to `schema`.

        `command_name` is the name used in error messages; it defaults to the
        name recorded in the schema.

        Returns:
            Any: The same command instance, fully bound.

        Raises:
            MissingArgumentError: A required slot found no value.
            FormatError: A value could not be coerced to its slot type.
        """
        command_name = command_name or schema.command_name
        token_set = classify_tokens(tokens)

        for argument in schema.required:
            raw_value = token_set.take(argument.name)
            if not raw_value:
                raise MissingArgumentError(argument.name, command_name)
            self._assign(command_name, argument, raw_value, command)

        for argument in schema.optional:
            raw_value = token_set.take(argument.name)
            if not raw_value:
                continue
            self._assign(command_name, argument, raw_value, command)

        if not token_set.is_empty():
            logger.debug(
                "[%s] Ignored unmatched tokens: positional=%s named=%s",
                command_name,
                list(token_set.positional),
                token_set.named,
            )
        return command

    def _assign(
        self,
        command_name: str,
        argument: ArgumentDescriptor,
        raw_value: str,
        command: Any,
    ) -> None:
        try:
            value = coerce_value(raw_value, argument.type)
        except (ValueError, TypeError) as error:
            raise FormatError(
                argument.name, command_name, raw_value, str(error)
            ) from error
        setattr(command, argument.attribute, value)
        logger.debug(
            "[%s] Bound '%s' = %r", command_name, argument.name, value
        )
