"""
dataclass_optbinder - Declarative command-line options for dataclasses.

Fields of an options dataclass carry short/long flag declarations in their
metadata. From them this package builds a command specification, renders
localized help text, and parses argument vectors back onto the fields.
Mistyped input never raises; it flags the instance for help instead.
"""

from .binder import bind_options
from .binding import OptionBinder, parse_args
from .constants import DEFAULT_BUNDLE_NAME, DEFAULT_LOCALE
from .declarations import Option, SystemOptions, option_field, options_data
from .descriptors import OptionDescriptor, discover_fields
from .engine import MatchResult, match_arguments
from .errors import (
    ConfigurationError,
    OptionBinderError,
    UserInputError,
    ValueConversionError,
)
from .usage import format_help, render_help
from .localization import LocalizationSource, load_bundle
from .messages import MsgStyle, StyledMessage
from .specification import CommandSpecification, build_specification

__version__ = "1.0.0"
__all__ = [
    "CommandSpecification",
    "ConfigurationError",
    "DEFAULT_BUNDLE_NAME",
    "DEFAULT_LOCALE",
    "LocalizationSource",
    "MatchResult",
    "MsgStyle",
    "Option",
    "OptionBinder",
    "OptionBinderError",
    "OptionDescriptor",
    "StyledMessage",
    "SystemOptions",
    "UserInputError",
    "ValueConversionError",
    "bind_options",
    "build_specification",
    "discover_fields",
    "format_help",
    "load_bundle",
    "match_arguments",
    "option_field",
    "options_data",
    "parse_args",
    "render_help",
]
