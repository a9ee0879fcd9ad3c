"""
Value types supported for option fields and the converters that turn raw
command-line strings into them.

Converters raise ``ValueError``/``TypeError`` on bad input; the engine turns
those into :class:`~dataclass_optbinder.errors.ValueConversionError`.
"""

import dataclasses
import enum
import pathlib
import types
import typing
from typing import Any, Callable, Literal, Optional, Union

from .errors import ConfigurationError


class ValueKind(enum.Enum):
    FLAG = "flag"
    SCALAR = "scalar"
    LIST = "list"


@dataclasses.dataclass(frozen=True)
class TypeInfo:
    """How the engine consumes an option of a given value type."""

    kind: ValueKind
    converter: Callable[[str], Any]
    metavar: str
    type_name: str
    choices: Optional[tuple] = None


def _get_optional_inner_type(type_hint: Any) -> Optional[Any]:
    """
    If type_hint is Optional[T] (i.e., Union[T, None] or T | None), return T.
    Otherwise, return None.
    """
    origin = typing.get_origin(type_hint)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(type_hint)
        non_none_args = [a for a in args if a is not type(None)]
        if len(non_none_args) == 1 and type(None) in args:
            return non_none_args[0]
    return None


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Only accepts 'True', 'true', 'False', 'false', '1', '0' as valid values.
    """
    if value in ("True", "true", "1"):
        return True
    elif value in ("False", "false", "0"):
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


def _flag_present(_: Any) -> bool:
    """Flags take no argument; matching one means True."""
    return True


def _enum_factory(enum_type: type[enum.Enum]) -> Callable[[str], enum.Enum]:
    """Match enum members by name (case-insensitive) first, then by value."""

    def parse_enum(s: str) -> enum.Enum:
        for member in enum_type:
            if member.name.lower() == s.lower():
                return member
        for member in enum_type:
            if str(member.value) == s:
                return member
        raise ValueError(f"'{s}' is not one of {[m.name for m in enum_type]}")

    return parse_enum


def _literal_factory(choices: tuple) -> Callable[[str], Any]:
    def parse_literal(s: str) -> Any:
        for choice in choices:
            if str(choice) == s:
                return choice
        raise ValueError(f"'{s}' is not one of {list(choices)}")

    return parse_literal


def _list_factory(elem_converter: Callable[[str], Any]) -> Callable[[str], list]:
    """
    Return a function that parses ``a,b,c`` or ``[a,b,c]`` into a typed list.
    """

    def parse_list(s: str) -> list:
        if s.startswith("[") and s.endswith("]"):
            s = s[1:-1]
        items = [item.strip() for item in s.split(",") if item.strip()]
        return [elem_converter(item) for item in items]

    return parse_list


_BASIC_TYPES: dict[Any, tuple[str, Callable[[str], Any]]] = {
    int: ("INT", int),
    float: ("FLOAT", float),
    str: ("STRING", str),
    pathlib.Path: ("PATH", pathlib.Path),
}


def _scalar_info(arg_type: Any) -> Optional[TypeInfo]:
    if arg_type in _BASIC_TYPES:
        metavar, converter = _BASIC_TYPES[arg_type]
        return TypeInfo(ValueKind.SCALAR, converter, metavar, arg_type.__name__)

    if isinstance(arg_type, enum.EnumMeta):
        choices = tuple(member.name for member in arg_type)
        return TypeInfo(
            ValueKind.SCALAR,
            _enum_factory(arg_type),
            "{" + ",".join(choices) + "}",
            arg_type.__name__,
            choices,
        )

    if typing.get_origin(arg_type) is Literal:
        choices = typing.get_args(arg_type)
        return TypeInfo(
            ValueKind.SCALAR,
            _literal_factory(choices),
            "{" + ",".join(str(choice) for choice in choices) + "}",
            "choice",
            choices,
        )
    return None


def resolve_type_info(value_type: Any) -> TypeInfo:
    """
    Work out how options of ``value_type`` are parsed.

    Args:
        value_type: The declared type of the field.

    Returns:
        TypeInfo: converter, default metavar and arity of the option.

    Raises:
        ConfigurationError: If the type cannot be read from the command line.
    """
    inner_type = _get_optional_inner_type(value_type)
    if inner_type is not None:
        value_type = inner_type

    if value_type is bool:
        return TypeInfo(ValueKind.FLAG, _flag_present, "", "bool")

    info = _scalar_info(value_type)
    if info is not None:
        return info

    if typing.get_origin(value_type) in (list, typing.List):
        args = typing.get_args(value_type)
        elem_type = args[0] if args else str
        if elem_type is bool:
            elem_info = TypeInfo(ValueKind.SCALAR, _strict_bool, "BOOL", "bool")
        else:
            elem_info = _scalar_info(elem_type)
        if elem_info is not None:
            return TypeInfo(
                ValueKind.LIST,
                _list_factory(elem_info.converter),
                "LIST",
                f"list of {elem_info.type_name}",
            )

    raise ConfigurationError(f"Unsupported option value type: {value_type!r}")
