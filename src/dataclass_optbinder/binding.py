"""
OptionBinder - parse command lines into options dataclasses.

This module ties the pieces together: it builds the command specification of
an options type, matches an argument vector against it and binds the result
onto an options instance. Input mistakes never escape as exceptions; they set
the help-requested flag of the instance instead.
"""

import sys
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from result import Err, Ok, Result

from .binder import bind_options
from .constants import DEFAULT_HELP_WIDTH, DEFAULT_LOCALE
from .declarations import SystemOptions
from .engine import match_arguments
from .usage import format_help
from .messages import MsgStyle, StyledMessage
from .specification import CommandSpecification, build_specification

OptionsT = TypeVar("OptionsT", bound=SystemOptions)


def parse_args(
    options: SystemOptions,
    args: Optional[Sequence[str]] = None,
    locale: str = DEFAULT_LOCALE,
) -> None:
    """
    Populate ``options`` from the command line, or flag it for help.

    Args:
        options: The instance to populate. It is mutated in place.
        args: Arguments to parse. If None, uses sys.argv[1:].
        locale: Locale used to build the specification.

    Raises:
        ConfigurationError: If the specification of the type cannot be built.
    """
    OptionBinder(type(options), locale).parse(args, options)


class OptionBinder(Generic[OptionsT]):
    """
    Parser bound to one options type and locale.

    Example:
        @dataclass
        class DiceOptions(SystemOptions):
            count: int = option_field(
                Option("n", "count", "dice.count", "COUNT"), default=1
            )

        binder = OptionBinder(DiceOptions)
        options = binder.parse(["-n", "3"])
        if options.help:
            print(binder.format_help("roll"))
    """

    def __init__(self, options_type: Type[OptionsT], locale: str = DEFAULT_LOCALE) -> None:
        """
        Build the specification of ``options_type``.

        Raises:
            ConfigurationError: If the specification cannot be built.
        """
        self.options_type = options_type
        self.specification: CommandSpecification = build_specification(
            options_type, locale
        )

    @property
    def locale(self) -> str:
        return self.specification.locale

    def parse(
        self,
        args: Optional[Sequence[str]] = None,
        options: Optional[OptionsT] = None,
    ) -> OptionsT:
        """
        Parse arguments into ``options`` (a fresh default instance if None).

        Returns:
            OptionsT: The bound instance; its ``help`` flag is set if the
            arguments were rejected.
        """
        if options is None:
            options = self.options_type()
        outcome = match_arguments(
            self.specification, sys.argv[1:] if args is None else args
        )
        if isinstance(outcome, Ok):
            bind_options(options, outcome.ok_value)
        else:
            options.request_help()
        return options

    def safe_parse(self, args: Optional[Sequence[str]] = None) -> Result[OptionsT, str]:
        """
        Parse arguments into a fresh instance, reporting rejections as Err.

        Returns:
            Result[OptionsT, str]:
                - Ok with the bound instance,
                - Err with the reason the arguments were rejected.
        """
        outcome = match_arguments(
            self.specification, sys.argv[1:] if args is None else args
        )
        if isinstance(outcome, Err):
            return Err(outcome.err_value)
        options = self.options_type()
        bind_options(options, outcome.ok_value)
        return Ok(options)

    def format_help(self, command_name: str, width: int = DEFAULT_HELP_WIDTH) -> str:
        return format_help(self.specification.with_command_name(command_name), width)

    def render_help(
        self, command_name: str, width: int = DEFAULT_HELP_WIDTH
    ) -> StyledMessage:
        return StyledMessage(self.format_help(command_name, width), MsgStyle.CODE)
