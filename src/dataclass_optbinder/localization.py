"""
Localization bundles for option descriptions.

A bundle is addressed by a dotted name, ``"package.basename"``, and stored as
package resources next to the code:

    package/basename.yaml        base texts
    package/basename_it.yaml     language overrides
    package/basename_it_CH.yaml  country overrides

YAML (``.yaml``/``.yml``) and JSON files are accepted. Nested mappings are
flattened to dotted keys, so ``{"options": {"help": "..."}}`` provides
``options.help``.
"""

import collections
import dataclasses
import functools
import importlib.resources
import json
import logging
import types
from typing import Any, Mapping, Optional

import yaml

from .constants import BUNDLE_EXTENSIONS, DEFAULT_BUNDLE_NAME
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def normalize_locale(locale: str) -> str:
    """Normalize ``en``, ``en-us`` or ``en_US`` to ``en`` / ``en_US``."""
    parts = [part for part in locale.replace("-", "_").split("_") if part]
    if not parts:
        raise ConfigurationError(f"Invalid locale: {locale!r}")
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return "_".join([language, parts[1].upper(), *parts[2:]])


def _candidate_suffixes(locale: str) -> list[str]:
    """Bundle file suffixes from the most generic to the most specific."""
    parts = normalize_locale(locale).split("_")
    return [""] + ["_" + "_".join(parts[: i + 1]) for i in range(len(parts))]


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{full_key}."))
        elif value is not None:
            flat[full_key] = str(value)
    return flat


def _load_bundle_file(resource: Any, file_ext: str) -> dict[str, str]:
    """
    Load one bundle file.

    Args:
        resource: Traversable pointing at the file.
        file_ext: Extension of the file, selecting the format.

    Returns:
        dict[str, str]: Flattened key/text mapping.

    Raises:
        ConfigurationError: If the file is not valid YAML/JSON or not a mapping.
    """
    with resource.open("r", encoding="utf-8") as f:
        if file_ext in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML bundle {resource}: {e}")
        else:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON bundle {resource}: {e}")
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Bundle {resource} must contain a mapping, got {type(data).__name__}"
        )
    return _flatten(data)


@functools.lru_cache(maxsize=None)
def load_bundle(bundle_name: str, locale: str) -> Mapping[str, str]:
    """
    Load and merge the files of a bundle for a locale.

    The result is cached for the life of the process.

    Args:
        bundle_name: Dotted ``"package.basename"`` name.
        locale: Locale tag such as ``"en"`` or ``"it_IT"``.

    Returns:
        Mapping[str, str]: Read-only merged texts, specific locales overriding
        generic ones.

    Raises:
        ConfigurationError: If the package or every bundle file is missing.
    """
    package, _, basename = bundle_name.rpartition(".")
    if not package or not basename:
        raise ConfigurationError(
            f"Bundle name must look like 'package.basename', got {bundle_name!r}"
        )
    try:
        root = importlib.resources.files(package)
    except ModuleNotFoundError as e:
        raise ConfigurationError(f"Bundle package not found: {package}") from e

    texts: dict[str, str] = {}
    found = False
    for suffix in _candidate_suffixes(locale):
        for file_ext in BUNDLE_EXTENSIONS:
            resource = root.joinpath(f"{basename}{suffix}{file_ext}")
            if resource.is_file():
                logger.debug("Loading bundle file %s", resource)
                texts.update(_load_bundle_file(resource, file_ext))
                found = True
                break
    if not found:
        raise ConfigurationError(
            f"Can't find bundle {bundle_name!r} for locale {locale!r}"
        )
    return types.MappingProxyType(texts)


@dataclasses.dataclass(frozen=True)
class LocalizationSource:
    """
    A bundle bound to a locale.

    Keys missing from a custom bundle are looked up in ``fallback_bundle``
    (the default bundle), which is where the root options are described.
    """

    bundle_name: str
    locale: str
    fallback_bundle: Optional[str] = None

    @classmethod
    def for_bundle(cls, bundle_name: Optional[str], locale: str) -> "LocalizationSource":
        if bundle_name is None or bundle_name == DEFAULT_BUNDLE_NAME:
            return cls(DEFAULT_BUNDLE_NAME, locale)
        return cls(bundle_name, locale, fallback_bundle=DEFAULT_BUNDLE_NAME)

    @functools.cached_property
    def texts(self) -> Mapping[str, str]:
        if self.fallback_bundle is None:
            return load_bundle(self.bundle_name, self.locale)
        return collections.ChainMap(
            load_bundle(self.bundle_name, self.locale),
            load_bundle(self.fallback_bundle, self.locale),
        )

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.texts.get(key, default)

    def resolve(self, key: str) -> str:
        """
        Return the text for ``key``.

        Raises:
            ConfigurationError: If neither bundle defines the key.
        """
        texts = self.texts
        if key not in texts:
            raise ConfigurationError(
                f"Missing key {key!r} in bundle {self.bundle_name!r} "
                f"for locale {self.locale!r}"
            )
        return texts[key]
