"""Extract crate documentation from save-analysis data into a JSON:API document."""

__version__ = "0.1.0"
