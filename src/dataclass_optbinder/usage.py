"""Help renderer: localized usage text for an options type."""

from typing import Any, Type, Union

from .constants import DEFAULT_HELP_WIDTH, DEFAULT_LOCALE
from .engine import build_argument_parser
from .messages import MsgStyle, StyledMessage
from .specification import CommandSpecification, build_specification


def format_help(spec: CommandSpecification, width: int = DEFAULT_HELP_WIDTH) -> str:
    """Format the usage text of a specification, options in declaration order."""
    return build_argument_parser(spec, width=width).format_help()


def render_help(
    command_name: str,
    options: Union[Any, Type[Any]],
    locale: str = DEFAULT_LOCALE,
    width: int = DEFAULT_HELP_WIDTH,
) -> StyledMessage:
    """
    Render the help of an options type as a code-block message.

    Args:
        command_name: Name shown in the usage line.
        options: Options instance (or options type) to describe.
        locale: Locale of the description texts.
        width: Column width of the formatted text.

    Returns:
        StyledMessage: Usage text styled as ``MsgStyle.CODE``.

    Raises:
        ConfigurationError: If the specification cannot be built.
    """
    options_type = options if isinstance(options, type) else type(options)
    spec = build_specification(options_type, locale).with_command_name(command_name)
    return StyledMessage(format_help(spec, width), MsgStyle.CODE)
