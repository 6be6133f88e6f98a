# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `CommandCompleter`, the Prompt Toolkit completer used by the Conframe
interactive loop.

This completer supports:
- Command name and alias completion from the `CommandRegistry`
- `--name=` completion for argument slots not yet given on the line
- Value completion for enum, `Literal` and bool slots (`--color=red`)

Input is split with the same tokenizer the resolver uses, so completions agree
with how the line will actually be bound.
"""
from __future__ import annotations

import os
from enum import EnumMeta
from typing import Iterable, Literal, get_args, get_origin

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from conframe.binder import NAMED_PREFIX
from conframe.coercion import unwrap_optional
from conframe.descriptors import ArgumentDescriptor
from conframe.exceptions import ConframeError
from conframe.registry import CommandRegistry
from conframe.schema import get_schema
from conframe.tokenizer import tokenize


def value_choices(argument_descriptor: ArgumentDescriptor) -> list[str]:
    """Return the finite set of values an argument accepts, if it has one."""
    target_type, _ = unwrap_optional(argument_descriptor.type)
    if target_type is bool:
        return ["true", "false"]
    if isinstance(target_type, EnumMeta):
        return [member.name.lower() for member in target_type]
    if get_origin(target_type) is Literal:
        return [str(choice) for choice in get_args(target_type)]
    return []


class CommandCompleter(Completer):
    """
    Prompt Toolkit completer for Conframe command input.

    Args:
        registry (CommandRegistry): Registry providing command names and types.
    """

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the current input.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, unused.

        Yields:
            Completion: Completions matching the current stub.
        """
        tokens = tokenize(document.text_before_cursor)
        stub = tokens[-1]

        if len(tokens) == 1:
            prefix = stub.lower()
            suggestions = sorted(
                name for name in self.registry.names() if name.startswith(prefix)
            )
            yield from self._yield_lcp_completions(suggestions, prefix)
            return

        try:
            schema = get_schema(self.registry.resolve(tokens[0]))
        except ConframeError:
            return

        used = {
            token[len(NAMED_PREFIX) :].partition("=")[0]
            for token in tokens[1:-1]
            if token.startswith(NAMED_PREFIX)
        }

        if stub.startswith(NAMED_PREFIX) and "=" in stub:
            name = stub[len(NAMED_PREFIX) :].partition("=")[0]
            argument_descriptor = schema.get(name)
            if argument_descriptor is None:
                return
            suggestions = [
                f"{NAMED_PREFIX}{name}={choice}"
                for choice in value_choices(argument_descriptor)
            ]
            yield from self._yield_lcp_completions(suggestions, stub)
            return

        suggestions = []
        for argument_descriptor in schema.arguments:
            if argument_descriptor.name in used:
                continue
            flag = f"{NAMED_PREFIX}{argument_descriptor.name}"
            target_type, _ = unwrap_optional(argument_descriptor.type)
            suggestions.append(flag if target_type is bool else f"{flag}=")
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        """Quote a completion containing whitespace so it stays one token."""
        name, separator, value = text.partition("=")
        if separator and " " in value:
            return f'{name}="{value}"'
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions, stub):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match, yield it fully.
        - If multiple matches share a longer prefix, insert the prefix, but also
          display all matches in the menu.
        - If no shared prefix, list all matches individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
