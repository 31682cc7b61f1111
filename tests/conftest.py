from __future__ import annotations

import logging
from pathlib import Path

import pytest

from docdata.analysis import InMemoryAnalysisSource
from docdata.models import DefKind
from tests._fixtures.analysis_builder import CrateBuilder


@pytest.fixture
def crate_builder(tmp_path: Path) -> CrateBuilder:
    """Provide a crate with a save-analysis writer rooted at the pytest tmp_path."""
    return CrateBuilder(tmp_path)


@pytest.fixture
def demo_source() -> InMemoryAnalysisSource:
    """The ``demo`` crate: one documented module and one function."""
    source = InMemoryAnalysisSource()
    root = source.add_root("demo", docs="Demo crate")
    source.add_child(root, DefKind.MOD, "a", "demo::a", docs="mod a")
    source.add_child(root, DefKind.FUNCTION, "f", "demo::f", docs="")
    return source


@pytest.fixture(autouse=True)
def _reset_docdata_logger():
    yield
    logger = logging.getLogger("docdata")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
