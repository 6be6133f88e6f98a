# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Built-in command leaving the interactive loop."""
from conframe.command import BaseCommand, command
from conframe.signals import QuitSignal


@command("exit", "quit", description="Exits the application")
class ExitCommand(BaseCommand):
    def evaluate(self) -> None:
        raise QuitSignal()
