"""Pipeline orchestration for the build command."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .analysis.base import AnalysisSource
from .analysis.save_analysis import SaveAnalysisSource, save_analysis_dir
from .assets import DATA_FILE_NAME, AssetWriter
from .cargo import AnalysisGenerator
from .config import (
    ARTIFACT_ASSETS,
    ARTIFACT_JSON,
    DocDataConfig,
    load_config,
    resolve_crate_name,
    validate_artifacts,
)
from .extractor import SymbolExtractor
from .jsonapi.builder import DocumentBuilder
from .jsonapi.serializer import serialize_document
from .logging import get_logger

SourceFactory = Callable[[Path], AnalysisSource]


@dataclass
class BuildOutcome:
    """Files produced by a build run."""

    output_dir: Path
    data_path: Optional[Path] = None
    assets: List[Path] = field(default_factory=list)


class Orchestrator:
    """Runs generate, load, extract, build, serialize and write in sequence."""

    def __init__(
        self,
        generator: AnalysisGenerator | None = None,
        source_factory: SourceFactory | None = None,
        extractor: SymbolExtractor | None = None,
        builder: DocumentBuilder | None = None,
        asset_writer: AssetWriter | None = None,
    ) -> None:
        self._generator = generator
        self._source_factory = source_factory or SaveAnalysisSource.from_directory
        self.extractor = extractor or SymbolExtractor()
        self.builder = builder or DocumentBuilder()
        self._asset_writer = asset_writer
        self.logger = get_logger("orchestrator")

    def run_build(
        self,
        path: str | Path,
        *,
        crate: str | None = None,
        artifacts: Sequence[str] | None = None,
        skip_build: bool | None = None,
    ) -> BuildOutcome:
        """Document the crate at ``path`` and write the requested artifacts."""
        root = Path(path).expanduser().resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Project directory not found: {root}")
        config = load_config(root)
        crate_name = resolve_crate_name(config, crate)
        selected = validate_artifacts(artifacts) if artifacts is not None else config.artifacts
        skip = config.analysis.skip_build if skip_build is None else skip_build
        self.logger.info("Starting build for crate %s in %s", crate_name, root)

        outcome = BuildOutcome(output_dir=config.output_path)

        if ARTIFACT_JSON in selected:
            payload = self._render(config, crate_name, skip_build=skip)
            outcome.output_dir.mkdir(parents=True, exist_ok=True)
            outcome.data_path = outcome.output_dir / DATA_FILE_NAME
            outcome.data_path.write_bytes(payload)
            self.logger.info("Wrote %s", outcome.data_path)

        if ARTIFACT_ASSETS in selected:
            writer = self._asset_writer or AssetWriter()
            outcome.assets = writer.write(outcome.output_dir, crate_name=crate_name)

        return outcome

    def render(self, path: str | Path, *, crate: str | None = None, skip_build: bool | None = None) -> bytes:
        """Return the serialized JSON:API document without writing anything."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        skip = config.analysis.skip_build if skip_build is None else skip_build
        return self._render(config, resolve_crate_name(config, crate), skip_build=skip)

    def _render(self, config: DocDataConfig, crate_name: str, *, skip_build: bool) -> bytes:
        if skip_build:
            self.logger.info("Reusing existing save-analysis data")
        else:
            self._resolve_generator(config).generate(config.root)

        analysis_dir = save_analysis_dir(
            config.root, config.analysis.target_dir, config.analysis.profile
        )
        self.logger.info("Loading save-analysis data from %s", analysis_dir)
        source = self._source_factory(analysis_dir)

        model = self.extractor.extract(source, crate_name)
        self.logger.info("Generating JSON for crate %s", model.crate.name)
        document = self.builder.build(model, source)
        return serialize_document(document)

    def _resolve_generator(self, config: DocDataConfig) -> AnalysisGenerator:
        if self._generator is not None:
            return self._generator
        return AnalysisGenerator(
            cargo=config.analysis.cargo,
            target_dir=config.analysis.target_dir,
        )


__all__ = ["BuildOutcome", "Orchestrator", "SourceFactory"]
