import sys
from pathlib import Path

import pytest
import requests


# backend/ is a flat module directory; make it importable regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT / "backend", ROOT / "backend" / "scripts"):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


@pytest.fixture
def session():
    return requests.Session()
