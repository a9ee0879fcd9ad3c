"""
Descriptor registry: turns an options type into the ordered table of fields,
declarations and setters that the spec builder and the binder both walk.
"""

import dataclasses
import functools
import inspect
import logging
import typing
from typing import Any, Callable, Optional, Type

from .declarations import Option, SystemOptions, get_declarations
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTER_METADATA_KEY = "setter"

Setter = Callable[[Any, Any], None]


@dataclasses.dataclass(frozen=True)
class OptionDescriptor:
    """Metadata for one bindable command-line option."""

    field_name: str
    short_flag: Optional[str]
    long_flag: Optional[str]
    description_key: str
    argument_label: str
    value_type: Any

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(flag for flag in (self.short_flag, self.long_flag) if flag)


@dataclasses.dataclass(frozen=True)
class FieldBinding:
    """
    One entry of the registration table of an options type.

    Attributes:
        name: Field name on the options instance.
        owner: The level of the type chain that declares the field.
        value_type: Resolved annotation of the field.
        declarations: Option declarations that carry at least one flag.
        setter: Callable writing a value into the field of an instance.
    """

    name: str
    owner: Type[Any]
    value_type: Any
    declarations: tuple[Option, ...]
    setter: Setter

    def descriptors(self) -> list[OptionDescriptor]:
        return [
            OptionDescriptor(
                field_name=self.name,
                short_flag=declaration.short_flag,
                long_flag=declaration.long_flag,
                description_key=declaration.description,
                argument_label=declaration.arg_name,
                value_type=self.value_type,
            )
            for declaration in self.declarations
        ]


def _attribute_setter(name: str) -> Setter:
    def set_field(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return set_field


def _type_chain(options_type: Type[Any]) -> list[Type[Any]]:
    """Return the levels from ``options_type`` up to and including the root."""
    if not isinstance(options_type, type) or not dataclasses.is_dataclass(
        options_type
    ):
        raise ConfigurationError(f"{options_type!r} is not a dataclass type")
    chain = []
    for level in options_type.__mro__:
        chain.append(level)
        if level is SystemOptions:
            return chain
    raise ConfigurationError(
        f"{options_type.__qualname__} does not derive from {SystemOptions.__qualname__}"
    )


def _resolve_type_hints(options_type: Type[Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(options_type)
    except (NameError, TypeError) as e:
        raise ConfigurationError(
            f"Cannot resolve field types of {options_type.__qualname__}: {e}"
        ) from e


@functools.lru_cache(maxsize=None)
def discover_fields(options_type: Type[Any]) -> tuple[FieldBinding, ...]:
    """
    Build the registration table of an options type.

    Fields are listed level by level, most-derived level first and in
    declaration order within a level. A field redeclared by a subclass is
    listed once, at the subclass level.

    Args:
        options_type: A dataclass deriving from SystemOptions.

    Returns:
        tuple[FieldBinding, ...]: One entry per field carrying declarations.

    Raises:
        ConfigurationError: If the type is not a dataclass or does not reach
            the root options type.
    """
    chain = _type_chain(options_type)
    hints = _resolve_type_hints(options_type)
    fields = {f.name: f for f in dataclasses.fields(options_type)}

    bindings = []
    seen: set[str] = set()
    for level in chain:
        for name in inspect.get_annotations(level):
            if name in seen or name not in fields:
                continue
            seen.add(name)
            field = fields[name]
            declarations = []
            for declaration in get_declarations(field):
                if declaration.lookup_identifier is None:
                    logger.debug(
                        "Dropping option on %s.%s: no shortcode or name",
                        level.__qualname__,
                        name,
                    )
                    continue
                declarations.append(declaration)
            if not declarations:
                continue
            setter = field.metadata.get(SETTER_METADATA_KEY) or _attribute_setter(name)
            bindings.append(
                FieldBinding(
                    name=name,
                    owner=level,
                    value_type=hints.get(name, field.type),
                    declarations=tuple(declarations),
                    setter=setter,
                )
            )
    return tuple(bindings)


def collect_descriptors(options_type: Type[Any]) -> tuple[OptionDescriptor, ...]:
    """Flatten the registration table into the ordered descriptor list."""
    return tuple(
        descriptor
        for binding in discover_fields(options_type)
        for descriptor in binding.descriptors()
    )
