import threading
from enum import Enum
from typing import Optional

import pytest

from conframe.command import BaseCommand, argument, command
from conframe.exceptions import SchemaError
from conframe.schema import clear_schema_cache, derive_schema, get_schema


class Color(Enum):
    Red = 1
    Green = 2


@command("paint", description="Paints")
class Paint(BaseCommand):
    verbose: bool = argument()
    target: str = argument(required=True, description="What to paint")
    coats: int = argument(default=2)
    color: Color = argument("colour", required=True)
    finish: Optional[str] = argument()
    untyped = argument()

    def evaluate(self):
        return None


@command("paint-more")
class PaintMore(Paint):
    layers: float = argument()


@command("clash")
class Clash(BaseCommand):
    first: str = argument("value")
    second: str = argument("value")

    def evaluate(self):
        return None


# --- Fixtures ---
@pytest.fixture(autouse=True)
def clean_cache():
    clear_schema_cache()
    yield
    clear_schema_cache()


# --- Tests ---
def test_schema_preserves_declaration_order():
    schema = get_schema(Paint)
    assert schema.command_name == "paint"
    assert [a.name for a in schema.arguments] == [
        "verbose",
        "target",
        "coats",
        "colour",
        "finish",
        "untyped",
    ]
    assert [a.name for a in schema.required] == ["target", "colour"]
    assert [a.name for a in schema.optional] == ["verbose", "coats", "finish", "untyped"]


def test_schema_resolves_types_and_defaults():
    schema = get_schema(Paint)
    assert schema.get("target").type is str
    assert schema.get("target").description == "What to paint"
    assert schema.get("colour").type is Color
    assert schema.get("colour").attribute == "color"
    assert schema.get("coats").default == 2
    assert schema.get("verbose").default is False
    assert schema.get("finish").default is None
    assert schema.get("untyped").type is str
    assert schema.get("missing") is None


def test_schema_includes_inherited_arguments_first():
    schema = get_schema(PaintMore)
    assert schema.command_name == "paint-more"
    assert [a.name for a in schema.arguments][-1] == "layers"
    assert len(schema) == 7


def test_schema_is_cached_per_type():
    assert get_schema(Paint) is get_schema(Paint)
    assert get_schema(Paint) is not get_schema(PaintMore)


def test_duplicate_argument_names():
    with pytest.raises(SchemaError):
        derive_schema(Clash)


def test_concurrent_first_access_derives_once():
    results = []

    def worker():
        results.append(get_schema(Paint))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_unbound_slots_read_their_defaults():
    paint = Paint()
    assert paint.coats == 2
    assert paint.verbose is False
    assert paint.target == ""
    assert paint.color is None
    assert paint.finish is None
    paint.coats = 5
    assert paint.coats == 5
    assert Paint().coats == 2
