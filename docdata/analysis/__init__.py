"""Analysis database backends."""

from __future__ import annotations

from .base import AnalysisSource
from .memory import InMemoryAnalysisSource
from .save_analysis import SaveAnalysisSource, save_analysis_dir

__all__ = [
    "AnalysisSource",
    "InMemoryAnalysisSource",
    "SaveAnalysisSource",
    "save_analysis_dir",
]
