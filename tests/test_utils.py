import json
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from conframe import utils
from conframe.utils import (
    CaseInsensitiveDict,
    ensure_async,
    resolve_log_mode,
    running_in_container,
    setup_logging,
)


def installed_handlers():
    return [
        handler
        for handler in logging.getLogger().handlers
        if (handler.get_name() or "").startswith("conframe.")
    ]


# --- Fixtures ---
@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    monkeypatch.delenv("CONFRAME_LOG_MODE", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# --- ensure_async ---
@pytest.mark.asyncio
async def test_ensure_async_wraps_sync_function():
    def add(a, b):
        return a + b

    wrapped = ensure_async(add)
    assert wrapped is not add
    assert await wrapped(2, 3) == 5


@pytest.mark.asyncio
async def test_ensure_async_keeps_coroutine_function():
    async def fetch():
        return "done"

    assert ensure_async(fetch) is fetch
    assert await ensure_async(fetch)() == "done"


def test_ensure_async_rejects_non_callable():
    with pytest.raises(TypeError):
        ensure_async("not a function")


# --- CaseInsensitiveDict ---
def test_case_insensitive_dict():
    table = CaseInsensitiveDict()
    table["Greet"] = 1
    assert table["GREET"] == 1
    assert "greet" in table
    assert table.get("gReEt") == 1
    assert table.setdefault("GREET", 2) == 1
    assert list(table) == ["greet"]
    assert table.pop("GREET") == 1
    assert "greet" not in table


# --- running_in_container ---
def test_running_in_container(tmp_path):
    cgroup = tmp_path / "cgroup"
    cgroup.write_text("0::/kubepods/besteffort/pod1234\n", encoding="UTF-8")
    assert running_in_container(str(cgroup)) is True

    cgroup.write_text("0::/user.slice\n", encoding="UTF-8")
    assert running_in_container(str(cgroup)) is False
    assert running_in_container(str(tmp_path / "missing")) is False


# --- Log mode ---
def test_resolve_log_mode_prefers_explicit_mode(monkeypatch):
    monkeypatch.setenv("CONFRAME_LOG_MODE", "json")
    assert resolve_log_mode("CLI") == "cli"


def test_resolve_log_mode_from_environment(monkeypatch):
    monkeypatch.setenv("CONFRAME_LOG_MODE", "json")
    assert resolve_log_mode() == "json"


@pytest.mark.parametrize("in_container, expected", [(True, "json"), (False, "cli")])
def test_resolve_log_mode_from_container_detection(monkeypatch, in_container, expected):
    monkeypatch.setattr(utils, "running_in_container", lambda: in_container)
    assert resolve_log_mode() == expected


def test_resolve_log_mode_rejects_unknown_mode():
    with pytest.raises(ValueError, match="Invalid log mode"):
        resolve_log_mode("xml")


# --- setup_logging ---
def test_setup_logging_cli_mode():
    assert setup_logging("cli") == "cli"
    handlers = installed_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.WARNING


def test_setup_logging_json_mode():
    setup_logging("json", console_log_level=logging.INFO)
    (handler,) = installed_handlers()
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.level == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_replaces_only_its_own_handlers():
    foreign = logging.NullHandler()
    logging.getLogger().addHandler(foreign)
    setup_logging("cli")
    setup_logging("json")
    handlers = installed_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)
    assert foreign in logging.getLogger().handlers


def test_setup_logging_json_file(tmp_path):
    log_file = tmp_path / "conframe.log"
    setup_logging("cli", log_filename=str(log_file), json_log_to_file=True)
    assert {handler.get_name() for handler in installed_handlers()} == {
        "conframe.console",
        "conframe.file",
    }
    assert logging.getLogger().level == logging.DEBUG

    logging.getLogger("conframe.test").warning("disk %s", "full")
    for handler in installed_handlers():
        handler.flush()

    record = json.loads(log_file.read_text(encoding="UTF-8").strip().splitlines()[-1])
    assert record["message"] == "disk full"
    assert record["levelname"] == "WARNING"
    assert record["name"] == "conframe.test"
