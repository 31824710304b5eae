from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure package import works when running tests without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from json_size.config import LayoutConfig  # noqa: E402


@pytest.fixture(params=[4, 8], ids=["32bit", "64bit"])
def layout(request) -> LayoutConfig:
    return LayoutConfig.for_pointer_width(request.param)
