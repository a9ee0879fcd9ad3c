"""
Parser adapter: compiles a CommandSpecification into an ``argparse`` parser
and turns every parse outcome into either a MatchResult or an error message.
"""

import argparse
import dataclasses
import functools
import logging
import sys
from typing import Any, Optional, Sequence

from result import Err, Ok, Result

from .constants import DEFAULT_HELP_WIDTH, USAGE_DESCRIPTION_KEY, USAGE_EPILOG_KEY
from .converters import TypeInfo, ValueKind
from .descriptors import OptionDescriptor
from .errors import UserInputError, ValueConversionError
from .specification import CommandSpecification

logger = logging.getLogger(__name__)

# Namespace attribute collecting matches in command-line order.
MATCHES_DEST = "_option_matches"


@dataclasses.dataclass(frozen=True)
class Match:
    """One occurrence of an option on the command line."""

    descriptor: OptionDescriptor
    identifier: str
    value: Any


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises UserInputError instead of exiting."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        if sys.version_info >= (3, 14):
            kwargs.setdefault("color", False)
        super().__init__(**kwargs)

    def error(self, message: str) -> Any:
        raise UserInputError(message)


class _MatchAction(argparse.Action):
    """Converts the raw argument and records which identifier matched it."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        descriptor: OptionDescriptor,
        type_info: TypeInfo,
        **kwargs: Any,
    ) -> None:
        self.descriptor = descriptor
        self.type_info = type_info
        nargs = 0 if type_info.kind is ValueKind.FLAG else None
        super().__init__(option_strings, dest, nargs=nargs, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: Optional[str] = None,
    ) -> None:
        identifier = option_string or self.option_strings[0]
        try:
            value = self.type_info.converter(values)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ValueConversionError(
                identifier, values, self.type_info.type_name
            ) from e
        matches = getattr(namespace, MATCHES_DEST, None)
        if matches is None:
            matches = []
            setattr(namespace, MATCHES_DEST, matches)
        matches.append(Match(self.descriptor, identifier, value))


def _escape_help(text: str) -> str:
    # argparse %-formats help strings
    return text.replace("%", "%%")


def build_argument_parser(
    spec: CommandSpecification, width: int = DEFAULT_HELP_WIDTH
) -> OptionParser:
    """
    Compile a specification into an argparse parser.

    Args:
        spec: The command specification; its command name becomes ``prog``.
        width: Column width used when formatting help.

    Returns:
        OptionParser: A parser with one option per descriptor, in order.
    """
    description = spec.localization.get(USAGE_DESCRIPTION_KEY)
    epilog = spec.localization.get(USAGE_EPILOG_KEY)
    parser = OptionParser(
        prog=spec.command_name,
        description=description,
        epilog=epilog,
        formatter_class=functools.partial(argparse.HelpFormatter, width=width),
    )
    for index, descriptor in enumerate(spec.descriptors):
        type_info = spec.type_info(descriptor)
        metavar = None
        if type_info.kind is not ValueKind.FLAG:
            metavar = descriptor.argument_label or type_info.metavar
        parser.add_argument(
            *descriptor.identifiers,
            action=_MatchAction,
            dest=f"option_{index}",
            default=argparse.SUPPRESS,
            descriptor=descriptor,
            type_info=type_info,
            metavar=metavar,
            help=_escape_help(spec.describe(descriptor)),
        )
    return parser


class MatchResult:
    """
    Options matched on a command line, with converted values.

    Lookups take any identifier of an option. When an option was given
    under several of its identifiers, the value given under the requested
    identifier wins; otherwise the last value given under any alias is used.
    List options collect every occurrence.
    """

    def __init__(self, spec: CommandSpecification, matches: Sequence[Match]) -> None:
        self.specification = spec
        self.matches: tuple[Match, ...] = tuple(matches)

    def _hits(self, identifier: str) -> list[Match]:
        descriptor = self.specification.find(identifier)
        if descriptor is None:
            return []
        return [m for m in self.matches if m.descriptor == descriptor]

    def has_matched_option(self, identifier: str) -> bool:
        return bool(self._hits(identifier))

    def matched_value(self, identifier: str, default: Any = None) -> Any:
        hits = self._hits(identifier)
        if not hits:
            return default
        if self.specification.type_info(hits[0].descriptor).kind is ValueKind.LIST:
            return [value for m in hits for value in m.value]
        exact = [m for m in hits if m.identifier == identifier]
        return (exact or hits)[-1].value

    @property
    def matched_options(self) -> list[OptionDescriptor]:
        seen: list[OptionDescriptor] = []
        for m in self.matches:
            if m.descriptor not in seen:
                seen.append(m.descriptor)
        return seen

    def __contains__(self, identifier: str) -> bool:
        return self.has_matched_option(identifier)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{m.identifier}={m.value!r}" for m in self.matches)
        return f"MatchResult({pairs})"


def match_arguments(
    spec: CommandSpecification, args: Sequence[str]
) -> Result[MatchResult, str]:
    """
    Match an argument vector against a specification.

    Never raises: a value that cannot be converted, an unknown option, a
    missing argument or any unexpected engine failure comes back as ``Err``.

    Args:
        spec: The command specification.
        args: Raw arguments, without the program name.

    Returns:
        Result[MatchResult, str]:
            - Ok with the matched options,
            - Err with the reason the arguments were rejected.
    """
    name = spec.options_type.__qualname__
    try:
        parser = build_argument_parser(spec)
        namespace = parser.parse_args(list(args))
    except ValueConversionError as e:
        logger.debug("%s: %s", name, e)
        return Err(str(e))
    except UserInputError as e:
        logger.warning("%s: %s", name, e)
        return Err(str(e))
    except Exception as e:
        logger.exception("%s: unexpected failure while parsing %r", name, list(args))
        return Err(str(e))
    return Ok(MatchResult(spec, getattr(namespace, MATCHES_DEST, ())))
