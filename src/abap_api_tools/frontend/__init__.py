"""Frontend: call templates, annotations and UI scaffolding."""

from .annotations import annotation_data, dump_annotations, load_annotations, parse_annotations
from .call_template import render_call_template
from .renderer import render
from .scaffold import ScaffoldRenderer, fill, render_scaffold
from .writer import emit_artifacts, write_artifacts

__all__ = [
    "ScaffoldRenderer",
    "annotation_data",
    "dump_annotations",
    "emit_artifacts",
    "fill",
    "load_annotations",
    "parse_annotations",
    "render",
    "render_call_template",
    "render_scaffold",
    "write_artifacts",
]
