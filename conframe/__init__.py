"""
Conframe CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .application import CliApplication
from .binder import ArgumentBinder
from .command import BaseCommand, argument, command
from .descriptors import ArgumentDescriptor, ArgumentSchema, CommandDescriptor
from .factory import CommandFactory
from .registry import CommandRegistry
from .resolver import CommandResolver
from .schema import get_schema
from .tokenizer import tokenize

logger = logging.getLogger("conframe")


__all__ = [
    "ArgumentBinder",
    "ArgumentDescriptor",
    "ArgumentSchema",
    "BaseCommand",
    "CliApplication",
    "CommandDescriptor",
    "CommandFactory",
    "CommandRegistry",
    "CommandResolver",
    "argument",
    "command",
    "get_schema",
    "tokenize",
]
