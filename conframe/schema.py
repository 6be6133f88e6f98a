# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Derives and caches the `ArgumentSchema` of command types.

The schema of a type never changes once the class is defined, so it is derived
on first use and kept for the lifetime of the process. Population of the cache
is serialized by a lock; reads of an already cached schema take no lock.
"""
from __future__ import annotations

import threading

from conframe.command import declared_arguments, get_command_descriptor
from conframe.descriptors import ArgumentDescriptor, ArgumentSchema
from conframe.exceptions import SchemaError
from conframe.logger import logger

_schema_cache: dict[type, ArgumentSchema] = {}
_schema_lock = threading.Lock()


def derive_schema(command_type: type) -> ArgumentSchema:
    """Build the schema of `command_type` from its declared argument slots."""
    descriptor = get_command_descriptor(command_type)
    command_name = descriptor.primary_name if descriptor else command_type.__name__

    arguments: list[ArgumentDescriptor] = []
    seen: set[str] = set()
    for slot in declared_arguments(command_type):
        if slot.name in seen:
            raise SchemaError(
                f"Duplicate argument name '{slot.name}' on command '{command_name}'"
            )
        seen.add(slot.name)
        arguments.append(
            ArgumentDescriptor(
                name=slot.name,
                attribute=slot.attribute,
                type=slot.target_type(command_type),
                required=slot.required,
                description=slot.description,
                default=slot.default_for(command_type),
                example=slot.example,
            )
        )

    return ArgumentSchema.from_arguments(command_name, arguments)


def get_schema(command_type: type) -> ArgumentSchema:
    """Return the cached schema of `command_type`, deriving it on first use."""
    schema = _schema_cache.get(command_type)
    if schema is not None:
        return schema

    with _schema_lock:
        schema = _schema_cache.get(command_type)
        if schema is None:
            schema = derive_schema(command_type)
            _schema_cache[command_type] = schema
            logger.debug(
                "[%s] Derived schema: %d required, %d optional",
                schema.command_name,
                len(schema.required),
                len(schema.optional),
            )
    return schema


def clear_schema_cache() -> None:
    with _schema_lock:
        _schema_cache.clear()
