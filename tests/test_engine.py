import logging
from unittest.mock import patch

from result import Err, Ok

from dataclass_optbinder import MatchResult, build_specification, match_arguments
from dataclass_optbinder.engine import build_argument_parser

from sample_options import DiceOptions


def match(args):
    return match_arguments(build_specification(DiceOptions), args)


class TestMatchArguments:
    """Test suite for the parser adapter."""

    def test_values_are_converted(self):
        outcome = match(["-n", "3", "--modifier", "-2", "-v"])
        assert isinstance(outcome, Ok)
        result = outcome.ok_value
        assert result.matched_value("-n") == 3
        assert result.matched_value("--modifier") == -2
        assert result.matched_value("--verbose") is True

    def test_unmatched_options(self):
        result = match(["-n", "3"]).ok_value
        assert "--count" in result
        assert "-s" not in result
        assert result.matched_value("-s") is None
        assert result.matched_value("-s", 6) == 6
        assert result.matched_value("--bogus") is None

    def test_matched_options_in_command_line_order(self):
        result = match(["-v", "-n", "2", "--count", "4"]).ok_value
        assert [d.field_name for d in result.matched_options] == ["verbose", "count"]

    def test_empty_arguments(self):
        result = match([]).ok_value
        assert result.matches == ()
        assert repr(result) == "MatchResult()"

    def test_inline_value(self):
        assert match(["--count=5"]).ok_value.matched_value("--count") == 5

    def test_exact_identifier_wins(self):
        """A value given under the requested identifier beats its alias."""
        result = match(["-n", "5", "--count", "7"]).ok_value
        assert result.matched_value("-n") == 5
        assert result.matched_value("--count") == 7

    def test_alias_value_when_identifier_unused(self):
        result = match(["--count", "7"]).ok_value
        assert result.matched_value("-n") == 7

    def test_abbreviations_are_not_accepted(self):
        assert isinstance(match(["--cou", "2"]), Err)


class TestDegradation:
    """Every failure comes back as Err, never as an exception."""

    def test_unknown_option(self, caplog):
        caplog.set_level(logging.DEBUG, logger="dataclass_optbinder")
        outcome = match(["--bogus"])
        assert isinstance(outcome, Err)
        assert "--bogus" in outcome.err_value
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings and "DiceOptions" in warnings[0].getMessage()

    def test_conversion_failure_is_debug_only(self, caplog):
        caplog.set_level(logging.DEBUG, logger="dataclass_optbinder")
        outcome = match(["--count", "abc"])
        assert isinstance(outcome, Err)
        assert "abc" in outcome.err_value
        assert all(r.levelno <= logging.DEBUG for r in caplog.records)

    def test_missing_value(self):
        assert isinstance(match(["-n"]), Err)

    def test_stray_positional(self):
        assert isinstance(match(["-n", "2", "extra"]), Err)

    def test_unexpected_failure(self, caplog):
        with patch(
            "dataclass_optbinder.engine.build_argument_parser",
            side_effect=RuntimeError("engine exploded"),
        ):
            outcome = match(["-n", "1"])
        assert isinstance(outcome, Err)
        assert outcome.err_value == "engine exploded"
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors and errors[0].exc_info is not None


class TestBuildArgumentParser:
    def test_one_action_per_descriptor(self):
        spec = build_specification(DiceOptions)
        parser = build_argument_parser(spec)
        option_strings = [a.option_strings for a in parser._actions]
        assert option_strings == [list(d.identifiers) for d in spec.descriptors]

    def test_metavars(self):
        parser = build_argument_parser(build_specification(DiceOptions))
        metavars = {a.option_strings[0]: a.metavar for a in parser._actions}
        assert metavars["-n"] == "COUNT"
        assert metavars["--modifier"] == "MOD"
        assert metavars["-v"] is None

    def test_match_result_type(self):
        assert isinstance(match([]).ok_value, MatchResult)
