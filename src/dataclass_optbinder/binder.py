"""Binder: write matched option values back onto an options instance."""

import logging
from typing import Any

from .descriptors import discover_fields
from .engine import MatchResult
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def bind_options(options: Any, match: MatchResult) -> None:
    """
    Assign every matched value to its field on ``options``.

    For each declaration the short flag is looked up when declared, the long
    flag otherwise. A field that cannot be written is logged and skipped;
    the remaining fields are still bound.

    Args:
        options: Instance of the type the match's specification was built from.
        match: Result of matching the command line.

    Raises:
        ConfigurationError: If ``options`` is not an instance of that type.
    """
    options_type = match.specification.options_type
    if not isinstance(options, options_type):
        raise ConfigurationError(
            f"Cannot bind {options_type.__qualname__} options onto "
            f"{type(options).__qualname__}"
        )
    for binding in discover_fields(options_type):
        for declaration in binding.declarations:
            identifier = declaration.lookup_identifier
            if identifier is None or not match.has_matched_option(identifier):
                continue
            value = match.matched_value(identifier)
            try:
                binding.setter(options, value)
            except Exception:
                logger.error(
                    "Cannot set %s.%s from %s",
                    options_type.__qualname__,
                    binding.name,
                    identifier,
                    exc_info=True,
                )
