from enum import Enum
from typing import Optional

import pytest

from conframe.binder import ArgumentBinder, classify_tokens
from conframe.command import BaseCommand, argument, command
from conframe.exceptions import FormatError, MissingArgumentError
from conframe.schema import get_schema


class State(Enum):
    Running = 1
    Stopped = 2


@command("greet", description="Greets someone")
class Greet(BaseCommand):
    name: str = argument(required=True)
    shout: bool = argument()

    def evaluate(self):
        return self.name.upper() if self.shout else self.name


@command("copy")
class Copy(BaseCommand):
    verbose: str = argument()
    source: str = argument(required=True)
    target: str = argument(required=True)

    def evaluate(self):
        return None


@command("scale")
class Scale(BaseCommand):
    count: int = argument(required=True)
    factor: float = argument()
    state: State = argument()
    limit: Optional[int] = argument()
    label: str = argument(default="none")

    def evaluate(self):
        return None


def bind(command_type, tokens):
    return ArgumentBinder().bind(get_schema(command_type), tokens, command_type())


# --- classify_tokens ---
def test_classify_named_and_positional():
    token_set = classify_tokens(
        ["Ada", "--shout", '--title="Dr X"', '"quoted"', "--n=a=b"]
    )
    assert list(token_set.positional) == ["Ada", "quoted"]
    assert token_set.named == {"shout": "true", "title": "Dr X", "n": "a=b"}


def test_classify_empty_value_and_bare_prefix():
    token_set = classify_tokens(["--name=", "--"])
    assert token_set.named == {"name": ""}
    assert list(token_set.positional) == ["--"]


def test_classify_duplicate_named_last_wins():
    token_set = classify_tokens(["--a=1", "--a=2"])
    assert token_set.named == {"a": "2"}


# --- bind ---
@pytest.mark.parametrize(
    "tokens",
    [
        ["Alice", "--shout"],
        ["--shout", "Alice"],
        ["--name=Alice", "--shout=true"],
        ["--shout", "--name=Alice"],
    ],
)
def test_greet_binding_is_order_independent(tokens):
    greet = bind(Greet, tokens)
    assert greet.name == "Alice"
    assert greet.shout is True


def test_greet_missing_required():
    with pytest.raises(MissingArgumentError) as excinfo:
        bind(Greet, [])
    assert excinfo.value.argument == "name"
    assert excinfo.value.command == "greet"
    assert "'name'" in str(excinfo.value) and "'greet'" in str(excinfo.value)


def test_optional_left_at_default_when_absent():
    greet = bind(Greet, ["Alice"])
    assert greet.shout is False


def test_missing_names_first_unresolved_required_slot():
    with pytest.raises(MissingArgumentError) as excinfo:
        bind(Copy, ["a.txt"])
    assert excinfo.value.argument == "target"


def test_required_slots_take_positionals_before_optional_ones():
    copy = bind(Copy, ["a.txt", "b.txt", "loud"])
    assert copy.source == "a.txt"
    assert copy.target == "b.txt"
    assert copy.verbose == "loud"


def test_required_slot_takes_positional_meant_for_earlier_optional():
    copy = bind(Copy, ["loud", "a.txt"])
    assert copy.source == "loud"
    assert copy.target == "a.txt"
    assert copy.verbose == ""


def test_named_token_removes_slot_from_positional_contention():
    scale = bind(Scale, ["1.5", "--count=5"])
    assert scale.count == 5
    assert scale.factor == 1.5


def test_named_value_is_consumed_once():
    copy = bind(Copy, ["--source=a.txt", "b.txt"])
    assert copy.source == "a.txt"
    assert copy.target == "b.txt"
    assert copy.verbose == ""


def test_coercion_of_all_slot_types():
    scale = bind(Scale, ["7", "0.5", "RUNNING", "--limit=10", "--label=big"])
    assert scale.count == 7
    assert scale.factor == 0.5
    assert scale.state is State.Running
    assert scale.limit == 10
    assert scale.label == "big"


def test_unbound_slots_keep_defaults():
    scale = bind(Scale, ["7"])
    assert scale.factor == 0.0
    assert scale.state is None
    assert scale.limit is None
    assert scale.label == "none"


def test_format_error_names_slot_command_and_value():
    with pytest.raises(FormatError) as excinfo:
        bind(Scale, ["orange"])
    error = excinfo.value
    assert (error.argument, error.command, error.value) == ("count", "scale", "orange")
    assert "orange" in str(error)
    assert isinstance(error.__cause__, ValueError)


def test_unknown_enum_member_is_format_error():
    with pytest.raises(FormatError):
        bind(Scale, ["1", "--state=paused"])


def test_empty_value_counts_as_missing():
    with pytest.raises(MissingArgumentError):
        bind(Greet, ["--name="])
    with pytest.raises(MissingArgumentError):
        bind(Greet, ['""'])


def test_unmatched_tokens_are_ignored():
    greet = bind(Greet, ["Alice", "--unknown=1"])
    assert greet.name == "Alice"
    assert greet.shout is False

    copy = bind(Copy, ["a", "b", "c", "d"])
    assert (copy.source, copy.target, copy.verbose) == ("a", "b", "c")


def test_binding_returns_the_given_instance():
    instance = Greet()
    schema = get_schema(Greet)
    assert ArgumentBinder().bind(schema, ["Bob"], instance) is instance
