"""
Conframe CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .exit import ExitCommand
from .help import HelpCommand

__all__ = [
    "ExitCommand",
    "HelpCommand",
]
