# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Conframe argument binding.

This module converts raw string tokens into the target type of an argument slot,
including `Enum`, `bool`, `datetime`, `Decimal`, `Literal` and nullable
(`Optional[T]` / `T | None`) types.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member by case-insensitive name.
- coerce_value: General-purpose coercion to a target type.
- zero_default: Value of a slot when nothing is bound to it.
- unwrap_optional: Split a nullable type into its underlying type.
- describe_type: Human-readable name of a target type for help output.

All coercion failures raise `ValueError` (or `TypeError` from a constructor);
the binder turns them into `FormatError`.
"""
import types
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

TRUE_VALUES = {"true", "t", "1", "yes", "on"}
FALSE_VALUES = {"false", "f", "0", "no", "off"}

ZERO_DEFAULTS: dict[Any, Any] = {
    str: "",
    int: 0,
    float: 0.0,
    bool: False,
    Decimal: Decimal(0),
}


def _is_union(target_type: Any) -> bool:
    return isinstance(target_type, types.UnionType) or get_origin(target_type) is Union


def unwrap_optional(target_type: Any) -> tuple[Any, bool]:
    """
    Split a nullable type into `(underlying_type, True)`.

    Non-nullable types come back as `(target_type, False)`. For unions with more
    than one non-None member, the underlying type is the union of those members.
    """
    if not _is_union(target_type):
        return target_type, False
    args = get_args(target_type)
    non_none = tuple(arg for arg in args if arg is not type(None))
    if len(non_none) == len(args):
        return target_type, False
    if len(non_none) == 1:
        return non_none[0], True
    return Union[non_none], True


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts true/false, t/f, 1/0, yes/no and on/off in any case.

    Raises:
        ValueError: If the string is not a recognized boolean.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a string to an Enum member, matching member names case-insensitively.

    Raises:
        ValueError: If no member name matches.
    """
    if isinstance(value, enum_type):
        return value

    normalized = str(value).strip().lower()
    for member in enum_type:
        if member.name.lower() == normalized:
            return member

    names = [member.name for member in enum_type]
    raise ValueError(f"'{value}' should be one of {{{', '.join(names)}}}")


def zero_default(target_type: Any) -> Any:
    """
    Return the value a slot holds when nothing binds to it.

    Nullable types default to None; str, int, float, bool and Decimal default to
    their zero value; anything else defaults to None.
    """
    _, nullable = unwrap_optional(target_type)
    if nullable:
        return None
    return ZERO_DEFAULTS.get(target_type)


def coerce_value(value: str | None, target_type: Any) -> Any:
    """
    Convert a raw string to the given target type.

    Args:
        value (str | None): The raw value. None means "no value" and yields the
            type's `zero_default`.
        target_type (Any): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    if value is None:
        return zero_default(target_type)

    if target_type is Any or target_type is str:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        for choice in args:
            if str(choice) == value:
                return choice
        raise ValueError(
            f"Value '{value}' is not one of {{{', '.join(str(arg) for arg in args)}}}"
        )

    if _is_union(target_type):
        underlying, nullable = unwrap_optional(target_type)
        if nullable:
            return coerce_value(value, underlying)
        for arg in args:
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    if target_type is Decimal:
        try:
            return Decimal(value)
        except InvalidOperation as error:
            raise ValueError(f"Value '{value}' is not a valid decimal") from error

    return target_type(value)


def describe_type(target_type: Any) -> str:
    """Return a short display name such as `int`, `Color` or `float?`."""
    underlying, nullable = unwrap_optional(target_type)
    suffix = "?" if nullable else ""
    if get_origin(underlying) is Literal:
        choices = ",".join(str(arg) for arg in get_args(underlying))
        return f"{{{choices}}}{suffix}"
    if _is_union(underlying):
        return " | ".join(describe_type(arg) for arg in get_args(underlying)) + suffix
    name = getattr(underlying, "__name__", None) or str(underlying)
    return f"{name}{suffix}"
