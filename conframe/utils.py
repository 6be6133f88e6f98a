# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
General helpers for Conframe: async adaptation of command callables,
case-insensitive name tables and logging setup.

`setup_logging` installs one console handler (Rich for "cli" mode, JSON lines
for "json" mode) and optionally a file handler on the root logger. Handlers it
installs are named `conframe.*` and replaced on the next call; handlers added
by anyone else are left alone.
"""
from __future__ import annotations

import functools
import inspect
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import pythonjsonlogger.json
from rich.console import Console
from rich.logging import RichHandler

from conframe.logger import logger
from conframe.themes import get_theme

T = TypeVar("T")

LOG_MODE_ENV = "CONFRAME_LOG_MODE"
LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")
HANDLER_PREFIX = "conframe."


def get_program_invocation() -> str:
    """Return the program name to show in messages, e.g. `mytool` or `python app.py`."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else "conframe"
    if shutil.which(script):
        return os.path.basename(script)
    if "python" in os.path.basename(sys.executable):
        return f"python {script}"
    return script


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Return `function` unchanged if it is a coroutine function, else wrap it."""
    if not callable(function):
        raise TypeError(f"{function!r} is not callable")
    if inspect.iscoroutinefunction(function):
        return function  # type: ignore[return-value]

    @functools.wraps(function)
    async def run_sync(*args: Any, **kwargs: Any) -> T:
        return function(*args, **kwargs)

    return run_sync


class CaseInsensitiveDict(dict):
    """A dictionary that stores all string keys lower-cased."""

    def _normalize_key(self, key):
        return key.lower() if isinstance(key, str) else key

    def __setitem__(self, key, value):
        super().__setitem__(self._normalize_key(key), value)

    def __getitem__(self, key):
        return super().__getitem__(self._normalize_key(key))

    def __contains__(self, key):
        return super().__contains__(self._normalize_key(key))

    def get(self, key, default=None):
        return super().get(self._normalize_key(key), default)

    def pop(self, key, default=None):
        return super().pop(self._normalize_key(key), default)

    def setdefault(self, key, default=None):
        return super().setdefault(self._normalize_key(key), default)


def running_in_container(cgroup_path: str = "/proc/1/cgroup") -> bool:
    try:
        content = Path(cgroup_path).read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def resolve_log_mode(mode: str | None = None) -> str:
    """
    Pick the logging mode: the explicit `mode`, else `CONFRAME_LOG_MODE`, else
    "json" inside a container and "cli" everywhere else.

    Raises:
        ValueError: The chosen mode is not "cli" or "json".
    """
    if not mode:
        mode = os.getenv(LOG_MODE_ENV) or ("json" if running_in_container() else "cli")
    mode = mode.strip().lower()
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode!r}. Expected one of {LOG_MODES}")
    return mode


def build_console_handler(mode: str, level: int = logging.WARNING) -> logging.Handler:
    if mode == "cli":
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True, theme=get_theme()),
            rich_tracebacks=True,
            show_path=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    handler.set_name(f"{HANDLER_PREFIX}console")
    handler.setLevel(level)
    return handler


def build_file_handler(
    filename: str, as_json: bool = False, level: int = logging.DEBUG
) -> logging.Handler:
    handler = logging.FileHandler(filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(
            logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
    handler.set_name(f"{HANDLER_PREFIX}file")
    handler.setLevel(level)
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> str:
    """
    Configure logging for a Conframe application.

    Args:
        mode (str | None): "cli" for Rich console logs or "json" for JSON lines.
            Resolved with `resolve_log_mode` when not given.
        log_filename (str | None): Also log to this file. None disables file logging.
        json_log_to_file (bool): Format file records as JSON instead of text.
        file_log_level (int): Level of the file handler.
        console_log_level (int): Level of the console handler.

    Returns:
        str: The mode that was applied.

    Raises:
        ValueError: If the mode is invalid.
    """
    mode = resolve_log_mode(mode)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()

    handlers = [build_console_handler(mode, console_log_level)]
    if log_filename:
        handlers.append(build_file_handler(log_filename, json_log_to_file, file_log_level))
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(handler.level for handler in handlers))

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logger.debug("Logging initialized in '%s' mode.", mode)
    return mode
