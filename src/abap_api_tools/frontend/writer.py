"""Deliver rendered artifacts to disk or standard output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List

import typer

from ..domain import RenderedArtifact
from ..errors import ArtifactWriteError

logger = logging.getLogger(__name__)


def write_artifacts(artifacts: Iterable[RenderedArtifact], output_dir: Path) -> List[Path]:
    """Write artifacts below the output folder, overwriting existing files."""

    written: List[Path] = []
    for artifact in artifacts:
        target = Path(output_dir) / artifact.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.text, encoding="utf-8")
        except OSError as e:
            raise ArtifactWriteError(f"Cannot write {target}: {e}") from e
        logger.info(f"Saved: {target}")
        written.append(target)
    return written


def emit_artifacts(
    artifacts: Iterable[RenderedArtifact],
    echo: Callable[[str], None] = typer.echo,
) -> List[Path]:
    """Print artifacts instead of saving them."""

    for artifact in artifacts:
        echo(artifact.text)
    return []


__all__ = ["emit_artifacts", "write_artifacts"]
