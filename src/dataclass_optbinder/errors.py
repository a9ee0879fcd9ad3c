"""Exceptions raised by dataclass_optbinder."""


class OptionBinderError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(OptionBinderError):
    """
    An options type, declaration or localization bundle is broken.

    These are programming or deployment defects and are never downgraded to
    a help request.
    """


class UserInputError(OptionBinderError):
    """The argument vector could not be matched against the specification."""


class ValueConversionError(UserInputError):
    """An argument was present but could not be converted to the option type."""

    def __init__(self, identifier: str, raw_value: str, type_name: str) -> None:
        self.identifier = identifier
        self.raw_value = raw_value
        self.type_name = type_name
        super().__init__(
            f"Invalid value for {identifier}: {raw_value!r} is not a valid {type_name}"
        )
