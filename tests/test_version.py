import re

import eoe
from eoe import version


def test_version_string_is_semverish() -> None:
    assert isinstance(version.__version__, str)
    assert re.fullmatch(r"\d+\.\d+\.\d+([.-][0-9A-Za-z.]+)?", version.__version__) is not None


def test_package_reexports_version() -> None:
    assert eoe.__version__ == version.__version__
