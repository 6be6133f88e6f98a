# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for constructing and running Conframe CLI applications.

`CliApplication` wires a `CommandRegistry`, a `CommandFactory` and a
`CommandResolver` together and runs commands in one of two modes:

- single-shot: `await app.run(["greet", "Ada"])` resolves and executes one
  command, then exits the process with status 0, or 1 on failure;
- interactive: `await app.run([])` prints the welcome message and reads lines
  from a Prompt Toolkit session until `exit`, Ctrl-D or Ctrl-C.

Input errors (unknown command, missing or malformed argument, a constructor
dependency nobody registered) and exceptions raised by a command are reported
on the console. In interactive mode the loop keeps running; in single-shot
mode they become a non-zero exit status.
Registration errors are not caught and abort startup.

Example:
    app = CliApplication("Welcome to My CLI Tool!\\nType 'help' to see commands.")
    app.register_command(Greet)
    asyncio.run(app.run())
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markup import escape

from conframe.command import BaseCommand
from conframe.commands import ExitCommand, HelpCommand
from conframe.completer import CommandCompleter
from conframe.console import console
from conframe.exceptions import ConframeError, UnknownCommandError
from conframe.factory import CommandFactory
from conframe.logger import logger
from conframe.registry import CommandRegistry
from conframe.resolver import CommandResolver
from conframe.signals import QuitSignal
from conframe.themes import OneColors
from conframe.utils import ensure_async, get_program_invocation, setup_logging


class CliApplication:
    """
    Interactive and single-shot runner for registered commands.

    Args:
        welcome_message (str): Printed when the interactive loop starts.
        exit_message (str): Printed when the interactive loop ends.
        prompt (str): Prompt shown before each input line.
        program (str | None): Program name used in messages. Defaults to the
            current invocation.
        include_help_command (bool): Register the built-in `help` command.
        include_exit_command (bool): Register the built-in `exit` command.
        verbose (bool): Set the `conframe` logger to DEBUG.
        log_mode (str | None): Configure logging with `setup_logging` in "cli"
            or "json" mode. "auto" defers to `CONFRAME_LOG_MODE` and container
            detection. None leaves logging configuration to the caller.
        log_filename (str | None): Log file used together with `log_mode`.
        registry (CommandRegistry | None): Registry to use; a new one by default.
        services (CommandFactory | None): Factory to use; a new one by default.
    """

    def __init__(
        self,
        welcome_message: str = "",
        *,
        exit_message: str = "",
        prompt: str = "> ",
        program: str | None = None,
        include_help_command: bool = True,
        include_exit_command: bool = True,
        verbose: bool = False,
        log_mode: str | None = None,
        log_filename: str | None = None,
        registry: CommandRegistry | None = None,
        services: CommandFactory | None = None,
    ) -> None:
        self.welcome_message: str = welcome_message
        self.exit_message: str = exit_message
        self.prompt: str = prompt
        self.program: str = program or get_program_invocation()
        self.console: Console = console
        self.registry: CommandRegistry = registry or CommandRegistry()
        self.services: CommandFactory = services or CommandFactory()
        self.services.add_service(CommandRegistry, self.registry)
        self.services.add_service(CliApplication, self)
        self.resolver: CommandResolver = CommandResolver(self.registry, self.services)
        self._commands_to_register: list[type] = []
        if include_help_command:
            self._commands_to_register.append(HelpCommand)
        if include_exit_command:
            self._commands_to_register.append(ExitCommand)
        self._registered: bool = False
        self._prompt_session: PromptSession | None = None
        if log_mode:
            setup_logging(
                None if log_mode == "auto" else log_mode,
                log_filename=log_filename,
                console_log_level=logging.DEBUG if verbose else logging.WARNING,
            )
        if verbose:
            logging.getLogger("conframe").setLevel(logging.DEBUG)

    def register_command(self, command_type: type) -> None:
        """Queue a command type for registration when the application starts."""
        if command_type not in self._commands_to_register:
            self._commands_to_register.append(command_type)
        if self._registered:
            self.registry.register(command_type)

    def register_commands(self, *command_types: type) -> None:
        for command_type in command_types:
            self.register_command(command_type)

    def register_all(self) -> None:
        """Register every queued command type. Errors propagate to the caller."""
        if self._registered:
            return
        for command_type in self._commands_to_register:
            self.registry.register(command_type)
        self._registered = True
        logger.debug("Registered %d command(s).", len(self.registry.unique()))

    @property
    def prompt_session(self) -> PromptSession:
        if self._prompt_session is None:
            self._prompt_session = PromptSession(
                message=self.prompt,
                completer=CommandCompleter(self.registry),
                complete_while_typing=True,
            )
        return self._prompt_session

    async def execute(self, command: BaseCommand) -> Any:
        """Run a bound command, awaiting it when `evaluate` is a coroutine."""
        logger.info("Executing %s", type(command).__name__)
        return await ensure_async(command.evaluate)()

    def _handle_command_error(self, command: BaseCommand, error: Exception) -> None:
        logger.debug(
            "[%s] failed with error: %s", type(command).__name__, error, exc_info=True
        )
        self.console.print(
            f"[{OneColors.DARK_RED}]An error occurred while executing "
            f"{escape(type(command).__name__)}:[/] {escape(str(error))}"
        )

    def _print_input_error(self, error: ConframeError) -> None:
        if isinstance(error, UnknownCommandError):
            self.console.print(
                f"[{OneColors.LIGHT_YELLOW}]Command '{escape(error.name)}' not found. "
                "Type 'help' for a list of available commands.[/]"
            )
        else:
            self.console.print(f"[{OneColors.DARK_RED}]{escape(str(error))}[/]")

    async def run_line(self, line: str) -> None:
        """
        Resolve and execute one interactive input line.

        Conframe errors raised while resolving the line, such as an unknown
        command or a constructor dependency that cannot be filled, and failures
        of the command itself are printed, never raised.
        `QuitSignal` propagates to end the loop.
        """
        line = line.strip()
        if not line:
            return

        try:
            command = self.resolver.resolve_from_line(line)
        except ConframeError as error:
            logger.info("Could not resolve '%s': %s", line, error)
            self._print_input_error(error)
            return

        try:
            await self.execute(command)
        except Exception as error:
            self._handle_command_error(command, error)

    async def process_command(self) -> None:
        """Read one line from the prompt and run it."""
        with patch_stdout(raw=True):
            line = await self.prompt_session.prompt_async()
        await self.run_line(line)

    async def menu(self) -> None:
        """Run the interactive loop until exit, Ctrl-D or Ctrl-C."""
        self.register_all()
        logger.info("Starting interactive session: %s", self.program)
        if self.welcome_message:
            self.console.print(self.welcome_message)
        try:
            while True:
                try:
                    await self.process_command()
                except (EOFError, KeyboardInterrupt):
                    logger.info("EOF or KeyboardInterrupt. Exiting.")
                    break
                except QuitSignal:
                    logger.info("[QuitSignal]. <- Exiting.")
                    break
        finally:
            if self.exit_message:
                self.console.print(self.exit_message)

    async def run_argv(self, argv: Sequence[str]) -> None:
        """Resolve and execute a single command, then exit the process."""
        self.register_all()
        try:
            command = self.resolver.resolve_from_argv(list(argv))
        except ConframeError as error:
            logger.info("Could not resolve %s: %s", list(argv), error)
            self._print_input_error(error)
            sys.exit(1)

        try:
            await self.execute(command)
        except QuitSignal:
            sys.exit(0)
        except Exception as error:
            self._handle_command_error(command, error)
            sys.exit(1)
        sys.exit(0)

    async def run(self, argv: Sequence[str] | None = None) -> None:
        """
        Entrypoint for a Conframe application.

        Args:
            argv (Sequence[str] | None): Command line without the program name.
                Defaults to `sys.argv[1:]`. A non-empty argv runs a single
                command and exits; an empty one starts the interactive loop.

        Raises:
            SchemaError, DuplicateNameError: A queued command type is malformed.
            SystemExit: After a single-shot run.
        """
        if argv is None:
            argv = sys.argv[1:]
        self.register_all()
        if argv:
            await self.run_argv(argv)
        else:
            await self.menu()

    def run_sync(self, argv: Sequence[str] | None = None) -> None:
        asyncio.run(self.run(argv))
