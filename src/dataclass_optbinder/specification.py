"""Spec builder: compile an options type into a CommandSpecification."""

import dataclasses
import functools
import logging
from typing import Any, Optional, Type

from .constants import DEFAULT_COMMAND_NAME, DEFAULT_LOCALE
from .converters import TypeInfo, resolve_type_info
from .declarations import get_bundle_name
from .descriptors import OptionDescriptor, collect_descriptors
from .errors import ConfigurationError
from .localization import LocalizationSource, normalize_locale

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CommandSpecification:
    """
    Ordered option descriptors of an options type plus their bound texts.

    Descriptors keep declaration order (most-derived level first); the
    ``sort_options`` display policy is always off for built specifications.
    """

    options_type: Type[Any]
    descriptors: tuple[OptionDescriptor, ...]
    localization: LocalizationSource
    command_name: str = DEFAULT_COMMAND_NAME
    sort_options: bool = False

    @property
    def locale(self) -> str:
        return self.localization.locale

    def describe(self, descriptor: OptionDescriptor) -> str:
        if not descriptor.description_key:
            return ""
        return self.localization.resolve(descriptor.description_key)

    def type_info(self, descriptor: OptionDescriptor) -> TypeInfo:
        return resolve_type_info(descriptor.value_type)

    def find(self, identifier: str) -> Optional[OptionDescriptor]:
        for descriptor in self.descriptors:
            if identifier in descriptor.identifiers:
                return descriptor
        return None

    def with_command_name(self, command_name: str) -> "CommandSpecification":
        return dataclasses.replace(self, command_name=command_name)


def _check_descriptors(
    options_type: Type[Any],
    descriptors: tuple[OptionDescriptor, ...],
    localization: LocalizationSource,
) -> None:
    owners: dict[str, str] = {}
    for descriptor in descriptors:
        for identifier in descriptor.identifiers:
            if identifier in owners:
                raise ConfigurationError(
                    f"Option {identifier} of {options_type.__qualname__} is declared "
                    f"on both '{owners[identifier]}' and '{descriptor.field_name}'"
                )
            owners[identifier] = descriptor.field_name
        resolve_type_info(descriptor.value_type)
        if descriptor.description_key:
            localization.resolve(descriptor.description_key)


@functools.lru_cache(maxsize=None)
def _build_specification(options_type: Type[Any], locale: str) -> CommandSpecification:
    descriptors = collect_descriptors(options_type)
    localization = LocalizationSource.for_bundle(get_bundle_name(options_type), locale)
    _check_descriptors(options_type, descriptors, localization)
    logger.debug(
        "Built specification for %s (%s): %d options",
        options_type.__qualname__,
        locale,
        len(descriptors),
    )
    return CommandSpecification(
        options_type=options_type,
        descriptors=descriptors,
        localization=localization,
    )


def build_specification(
    options_type: Type[Any], locale: str = DEFAULT_LOCALE
) -> CommandSpecification:
    """
    Build the command specification of an options type.

    Args:
        options_type: Dataclass deriving from SystemOptions.
        locale: Locale of the description texts.

    Returns:
        CommandSpecification: The immutable, ordered specification.

    Raises:
        ConfigurationError: If a declaration, a value type, the bundle or one
            of its keys cannot be resolved.
    """
    return _build_specification(options_type, normalize_locale(locale))
