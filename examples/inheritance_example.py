#!/usr/bin/env python3
"""
Example showing how derived options types extend their base.

The derived type's options are listed first, then the inherited ones, then
the root ``-h/--help``. The bundle declared on the base is inherited.
"""

from dataclasses import dataclass

from dataclass_optbinder import (
    Option,
    OptionBinder,
    SystemOptions,
    option_field,
    options_data,
)


@options_data("dice_texts.dice")
@dataclass
class DiceOptions(SystemOptions):
    count: int = option_field(Option("n", "count", "dice.count", "COUNT"), default=1)
    sides: int = option_field(Option("s", "sides", "dice.sides", "SIDES"), default=6)


@dataclass
class ExplodingDiceOptions(DiceOptions):
    explode: bool = option_field(Option("x", "explode", "dice.explode"), default=False)


if __name__ == "__main__":
    binder = OptionBinder(ExplodingDiceOptions)
    print(binder.format_help("roll"))

    result = binder.safe_parse(["-x", "-n", "4", "--sides", "10"])
    print(f"Parsed: {result}")

    result = binder.safe_parse(["-n", "four"])
    print(f"Rejected: {result}")
