from dataclasses import dataclass

import pytest

from dataclass_optbinder import (
    ConfigurationError,
    Option,
    SystemOptions,
    build_specification,
    option_field,
    options_data,
    parse_args,
)
from dataclass_optbinder.specification import _build_specification

from sample_options import DICE_BUNDLE, DiceOptions, ExplodingDiceOptions, PlainOptions


@options_data("optbinder_test_bundles.partial")
@dataclass
class MissingKeyOptions(SystemOptions):
    count: int = option_field(Option("n", "count", "dice.count"), default=1)
    sides: int = option_field(Option("s", "sides", "dice.sides"), default=6)


@options_data("optbinder_test_bundles.missing")
@dataclass
class MissingBundleOptions(SystemOptions):
    count: int = option_field(Option("n", "count"), default=1)


@dataclass
class UnsupportedTypeOptions(SystemOptions):
    weights: dict[str, int] = option_field(Option("w", "weights"), default_factory=dict)


@dataclass
class DuplicateFlagOptions(SystemOptions):
    first: int = option_field(Option("n", "first"), default=0)
    second: int = option_field(Option("n", "second"), default=0)


def flags(spec):
    return [d.identifiers for d in spec.descriptors]


class TestBuildSpecification:
    """Test suite for compiling options types into specifications."""

    def test_descriptor_order(self):
        """Declaration order is kept; nothing is sorted."""
        spec = build_specification(DiceOptions)
        assert flags(spec) == [
            ("-n", "--count"),
            ("-s", "--sides"),
            ("--modifier",),
            ("-v", "--verbose"),
            ("-h", "--help"),
        ]
        assert spec.sort_options is False

    def test_inheritance_coverage(self):
        """Subtype options precede base options."""
        identifiers = [d.identifiers[0] for d in build_specification(ExplodingDiceOptions).descriptors]
        assert identifiers.index("-x") < identifiers.index("-n")
        assert identifiers[-1] == "-h"

    def test_determinism(self):
        """Rebuilding yields the same descriptors in the same order."""
        first = build_specification(DiceOptions, "en")
        _build_specification.cache_clear()
        second = build_specification(DiceOptions, "en")
        assert first is not second
        assert first == second

    def test_locale_independent_identifiers(self):
        """Only description texts change between locales."""
        english = build_specification(DiceOptions, "en")
        italian = build_specification(DiceOptions, "it")
        assert flags(english) == flags(italian)
        count = english.descriptors[0]
        assert english.describe(count) == "Number of dice to roll"
        assert italian.describe(italian.descriptors[0]) == "Numero di dadi da lanciare"

    def test_locale_tag_is_normalized(self):
        spec = build_specification(DiceOptions, "it-it")
        assert spec.locale == "it_IT"
        assert build_specification(DiceOptions, "it_IT") is spec

    def test_bound_bundle(self):
        assert build_specification(DiceOptions).localization.bundle_name == DICE_BUNDLE

    def test_default_bundle_only(self):
        spec = build_specification(PlainOptions)
        assert spec.localization.fallback_bundle is None
        assert spec.describe(spec.descriptors[0]) == ""

    def test_find(self):
        spec = build_specification(DiceOptions)
        assert spec.find("--count") is spec.find("-n")
        assert spec.find("--bogus") is None

    def test_with_command_name_keeps_descriptors(self):
        spec = build_specification(DiceOptions)
        named = spec.with_command_name("roll")
        assert named.command_name == "roll"
        assert named.descriptors == spec.descriptors


class TestConfigurationErrors:
    """Build-time defects propagate instead of degrading to help."""

    def test_missing_key(self):
        with pytest.raises(ConfigurationError) as exc:
            build_specification(MissingKeyOptions)
        assert "dice.sides" in str(exc.value)

    def test_missing_bundle(self):
        with pytest.raises(ConfigurationError):
            build_specification(MissingBundleOptions)

    def test_unsupported_value_type(self):
        with pytest.raises(ConfigurationError):
            build_specification(UnsupportedTypeOptions)

    def test_duplicate_flag(self):
        with pytest.raises(ConfigurationError) as exc:
            build_specification(DuplicateFlagOptions)
        assert "-n" in str(exc.value)

    def test_parse_propagates_configuration_error(self):
        """parse_args does not mask a broken bundle."""
        options = MissingBundleOptions()
        with pytest.raises(ConfigurationError):
            parse_args(options, ["-n", "2"])
        assert options.help is False
