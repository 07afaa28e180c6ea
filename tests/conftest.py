from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.shared.mock_server import CanvasCollectionServer  # noqa: E402


@pytest.fixture
def collection_server():
    def _build(total_pages: int, **kwargs) -> CanvasCollectionServer:
        return CanvasCollectionServer(total_pages=total_pages, **kwargs)

    return _build
