#!/usr/bin/env python3
"""
Example script demonstrating dataclass_optbinder.

Declares a dice-rolling options type, parses the command line into it and
prints the localized help whenever the input is not understood.

Try:
    python examples/dice_example.py -n 3 -s 20 --modifier 2 -v
    python examples/dice_example.py --count lots
    LANG_TAG=it python examples/dice_example.py --help
"""

import logging
import os
import random
from dataclasses import dataclass, field
from typing import Optional

from dataclass_optbinder import (
    Option,
    SystemOptions,
    option_field,
    options_data,
    parse_args,
    render_help,
)


@options_data("dice_texts.dice")
@dataclass
class DiceOptions(SystemOptions):
    """Options of the roll command."""

    count: int = field(
        default=1, metadata={"option": Option("n", "count", "dice.count", "COUNT")}
    )
    sides: int = option_field(Option("s", "sides", "dice.sides", "SIDES"), default=6)
    modifier: Optional[int] = option_field(
        Option(name="modifier", description="dice.modifier", arg_name="MOD"),
        default=None,
    )
    verbose: bool = option_field(Option("v", "verbose", "dice.verbose"), default=False)


def main() -> None:
    """Main function demonstrating the parser."""
    logging.basicConfig(level=logging.WARNING)
    locale = os.environ.get("LANG_TAG", "en")

    options = DiceOptions()
    parse_args(options, locale=locale)
    if options.help:
        print(render_help("roll", options, locale))
        return

    rolls = [random.randint(1, options.sides) for _ in range(options.count)]
    total = sum(rolls) + (options.modifier or 0)
    if options.verbose:
        print(f"Rolls: {rolls}")
    print(f"Total: {total}")


if __name__ == "__main__":
    main()
