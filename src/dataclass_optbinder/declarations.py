"""
Declaration surface for options holders.

An options holder is a dataclass deriving from :class:`SystemOptions`. Each
field that should be reachable from the command line carries one or more
:class:`Option` declarations in its metadata, in the same way a field carries
``{"help": ...}``:

    @dataclass
    class DiceOptions(SystemOptions):
        count: int = field(
            default=1,
            metadata={"option": Option("n", "count", "dice.count", "COUNT")},
        )

A type may point at its own localization bundle with :func:`options_data`.
"""

import dataclasses
from typing import Any, Callable, Optional, Type, TypeVar, Union

from .constants import OPTION_METADATA_KEY

T = TypeVar("T")

BUNDLE_ATTRIBUTE = "__options_bundle__"


@dataclasses.dataclass(frozen=True)
class Option:
    """
    One command-line declaration on a field.

    Attributes:
        shortcode: Short flag without the leading dash (``"n"`` for ``-n``).
        name: Long flag without the leading dashes (``"count"`` for ``--count``).
        description: Key of the description text in the localization bundle.
        arg_name: Label shown for the option argument in usage text.
    """

    shortcode: str = ""
    name: str = ""
    description: str = ""
    arg_name: str = ""

    @property
    def short_flag(self) -> Optional[str]:
        return f"-{self.shortcode}" if self.shortcode else None

    @property
    def long_flag(self) -> Optional[str]:
        return f"--{self.name}" if self.name else None

    @property
    def lookup_identifier(self) -> Optional[str]:
        """The identifier checked when binding; the short flag wins when declared."""
        return self.short_flag or self.long_flag


def option_field(
    *declarations: Option,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **metadata: Any,
) -> Any:
    """
    Shortcut for ``dataclasses.field`` carrying option declarations.

    Example:
        verbose: bool = option_field(Option("v", "verbose", "opts.verbose"), default=False)

    Args:
        *declarations: One or more Option declarations for the field.
        default: Default value of the field.
        default_factory: Factory for mutable defaults.
        **metadata: Extra metadata stored next to the declarations.
    """
    if not declarations:
        raise ValueError("option_field() needs at least one Option declaration")
    metadata[OPTION_METADATA_KEY] = (
        declarations[0] if len(declarations) == 1 else list(declarations)
    )
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata
    )


def get_declarations(field: dataclasses.Field) -> tuple[Option, ...]:
    """Return the Option declarations stored on a dataclass field, if any."""
    declared: Union[Option, list, tuple, None] = field.metadata.get(
        OPTION_METADATA_KEY
    )
    if declared is None:
        return ()
    if isinstance(declared, Option):
        return (declared,)
    return tuple(declared)


def options_data(bundle_name: str) -> Callable[[Type[T]], Type[T]]:
    """
    Class decorator declaring the localization bundle of an options type.

    Args:
        bundle_name: Dotted resource name, ``"package.basename"``.
    """

    def decorate(cls: Type[T]) -> Type[T]:
        setattr(cls, BUNDLE_ATTRIBUTE, bundle_name)
        return cls

    return decorate


def get_bundle_name(options_type: Type[Any]) -> Optional[str]:
    return getattr(options_type, BUNDLE_ATTRIBUTE, None)


@dataclasses.dataclass
class SystemOptions:
    """
    Root of every options type.

    The ``help`` field doubles as the help-requested flag: it is set either by
    ``-h/--help`` on the command line or by a failed parse.
    """

    help: bool = option_field(Option("h", "help", "options.help"), default=False)

    def request_help(self) -> None:
        self.help = True

    def is_help(self) -> bool:
        return self.help
