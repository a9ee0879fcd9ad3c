"""Default values shared across dataclass_optbinder."""

# Locale used when the caller does not pass one.
DEFAULT_LOCALE = "en"

# Bundle holding the descriptions of the root options (and any type that
# does not declare its own bundle).
DEFAULT_BUNDLE_NAME = "dataclass_optbinder.resources.system_bundle"

# Key under which option declarations are stored in dataclass field metadata.
OPTION_METADATA_KEY = "option"

# Display name used in usage text until a real command name is supplied.
DEFAULT_COMMAND_NAME = "<command>"

DEFAULT_HELP_WIDTH = 80

# Optional bundle keys rendered around the option list.
USAGE_DESCRIPTION_KEY = "usage.description"
USAGE_EPILOG_KEY = "usage.epilog"

BUNDLE_EXTENSIONS = (".yaml", ".yml", ".json")
