import sys
import textwrap

import pytest

from dataclass_optbinder.descriptors import discover_fields
from dataclass_optbinder.localization import load_bundle
from dataclass_optbinder.specification import _build_specification

BUNDLE_PACKAGE = "optbinder_test_bundles"

BUNDLE_FILES = {
    "__init__.py": "",
    "dice.yaml": """
        usage:
          description: Roll a handful of dice.
        dice:
          count: Number of dice to roll
          sides: Faces on each die
          modifier: Added to the total (10% bonus allowed)
          verbose: Print every single die
          explode: Reroll and add dice showing the highest face
    """,
    "dice_it.yaml": """
        usage:
          description: Lancia una manciata di dadi.
        dice:
          count: Numero di dadi da lanciare
          sides: Facce di ogni dado
          modifier: Aggiunto al totale
          verbose: Mostra ogni singolo dado
          explode: Rilancia i dadi con la faccia massima
    """,
    "partial.json": '{"dice": {"count": "Number of dice"}}',
    "listy.json": '["not", "a", "mapping"]',
    "broken.yaml": "dice: [unclosed\n",
}


@pytest.fixture(scope="session", autouse=True)
def bundle_package(tmp_path_factory):
    """Install a throwaway package holding the bundles used by the tests."""
    root = tmp_path_factory.mktemp("bundles")
    package_dir = root / BUNDLE_PACKAGE
    package_dir.mkdir()
    for name, content in BUNDLE_FILES.items():
        (package_dir / name).write_text(
            textwrap.dedent(content).lstrip(), encoding="utf-8"
        )
    sys.path.insert(0, str(root))
    yield package_dir
    sys.path.remove(str(root))
    sys.modules.pop(BUNDLE_PACKAGE, None)


@pytest.fixture(autouse=True)
def clear_caches():
    yield
    load_bundle.cache_clear()
    _build_specification.cache_clear()
    discover_fields.cache_clear()
