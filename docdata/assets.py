"""Writes the static documentation frontend next to the generated data."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined

from .logging import get_logger

DATA_FILE_NAME = "data.json"

TEMPLATED_ASSETS: Sequence[str] = ("index.html",)

STATIC_ASSETS: Sequence[str] = (
    "crossdomain.xml",
    "robots.txt",
    "assets/docdata.css",
    "assets/docdata.js",
)


class AssetWriter:
    """Renders ``index.html`` and copies the remaining frontend files."""

    def __init__(self, package: str = "docdata", directory: str = "frontend") -> None:
        self._package = package
        self._directory = directory
        self._env = Environment(
            loader=PackageLoader(package, directory),
            autoescape=True,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.logger = get_logger("assets")

    def write(self, output_dir: Path, *, crate_name: str, data_file: str = DATA_FILE_NAME) -> List[Path]:
        """Write every asset below ``output_dir`` and return the written paths."""
        output_dir = Path(output_dir)
        (output_dir / "assets").mkdir(parents=True, exist_ok=True)
        written: List[Path] = []

        for name in TEMPLATED_ASSETS:
            template = self._env.get_template(name)
            target = output_dir / name
            target.write_text(
                template.render(crate_name=crate_name, data_file=data_file),
                encoding="utf-8",
            )
            written.append(target)

        root = resources.files(self._package).joinpath(self._directory)
        for name in STATIC_ASSETS:
            target = output_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            source = root
            for part in name.split("/"):
                source = source.joinpath(part)
            target.write_bytes(source.read_bytes())
            written.append(target)

        self.logger.info("Copied %d frontend asset(s) to %s", len(written), output_dir)
        return written


__all__ = ["AssetWriter", "DATA_FILE_NAME", "STATIC_ASSETS", "TEMPLATED_ASSETS"]
