"""Run a command over a worklist of function module names."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional

import typer

from .backend import MetadataFetcher, ObjectModelBuilder
from .config import ConfigResolver, UIConfig
from .domain import (
    AbapObject,
    Command,
    EntryResult,
    GenerationRequest,
    RenderedArtifact,
    RunReport,
    Worklist,
    sap_language,
)
from .errors import ArtifactWriteError, ConfigurationError, ErrorKind, FetchError, RenderError
from .frontend import emit_artifacts, load_annotations, render, write_artifacts
from .frontend.naming import file_stem

logger = logging.getLogger(__name__)


class Orchestrator:
    """Process worklist names one after another.

    A failure of one name is logged and recorded in the report, the next
    name is processed anyway. Configuration errors end the run.
    """

    def __init__(
        self,
        fetcher: Optional[MetadataFetcher] = None,
        resolver: Optional[ConfigResolver] = None,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self.fetcher = fetcher
        self.resolver = resolver or ConfigResolver()
        self.echo = echo

    def run(self, worklist: Worklist, template: GenerationRequest) -> RunReport:
        if not template.command.renders:
            raise ConfigurationError(f"Command does not process a worklist: {template.command.value}")
        sap_language(template.locale)
        if template.command.needs_backend and self.fetcher is None:
            raise ConfigurationError(f"Command {template.command.value} needs a metadata fetcher")

        ui_config: Optional[UIConfig] = None
        if template.command == Command.MAKE:
            ui_config = self.resolver.load_config(template.target)

        report = RunReport()
        for catalog, names in worklist.items():
            for name in names:
                request = replace(template, name=name, catalog=catalog)
                report.add(self.process(request, ui_config))

        if report.failed:
            logger.error(f"{len(report.failed)} of {len(report.results)} failed")
        return report

    def process(self, request: GenerationRequest, ui_config: Optional[UIConfig] = None) -> EntryResult:
        """Build or load the model of one name, render and deliver it."""

        try:
            abap = self._model(request)
            artifacts = render(abap, request, ui_config)
            paths = self._deliver(request, artifacts)
        except (FetchError, RenderError, ArtifactWriteError) as e:
            logger.error(f"{request.name}: {e.kind.value} error: {e}")
            return EntryResult(
                catalog=request.catalog,
                name=request.name,
                error_kind=e.kind,
                message=str(e),
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.exception(f"{request.name}: unexpected error")
            return EntryResult(
                catalog=request.catalog,
                name=request.name,
                error_kind=ErrorKind.INTERNAL,
                message=f"{type(e).__name__}: {e}",
            )
        return EntryResult(catalog=request.catalog, name=request.name, artifacts=tuple(paths))

    def _model(self, request: GenerationRequest) -> AbapObject:
        if request.command.needs_backend:
            builder = ObjectModelBuilder(self.fetcher)
            return builder.build(request.name, request.target, request.locale, request.sort_fields)
        source = request.annotation_source() / f"{file_stem(request.name)}.yaml"
        return load_annotations(source, request.locale)

    def _deliver(self, request: GenerationRequest, artifacts: List[RenderedArtifact]) -> List[Path]:
        if request.save and request.output_dir is not None:
            return write_artifacts(artifacts, request.output_dir)
        return emit_artifacts(artifacts, self.echo)


__all__ = ["Orchestrator"]
