"""Frontend: render an AbapObject into artifacts for one command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..config.schema import UIConfig
from ..domain import AbapObject, Command, GenerationRequest, RenderedArtifact, UIFramework, sap_language
from ..errors import ConfigurationError, RenderError
from .annotations import dump_annotations
from .call_template import render_call_template
from .naming import file_stem
from .scaffold import render_scaffold

logger = logging.getLogger(__name__)


def _comment_header(signature: str) -> str:
    return f"# {signature}\n" if signature else ""


def render(
    abap: AbapObject,
    request: GenerationRequest,
    ui_config: Optional[UIConfig] = None,
) -> List[RenderedArtifact]:
    """Render the artifacts of one function module.

    The same AbapObject may be rendered any number of times; it is never
    modified. Bodies depend only on the object and the request, the run
    signature goes to the separate header.
    """

    try:
        sap_language(request.locale)
    except ConfigurationError as e:
        raise RenderError(str(e)) from e

    logger.debug(f"frontend run {abap.name} ({request.command.value})")
    stem = file_stem(abap.name)

    if request.command == Command.CALL:
        body = render_call_template(abap, request.sort_fields)
        return [RenderedArtifact(Path(f"{stem}.py"), body, _comment_header(request.signature))]

    if request.command == Command.GET:
        body = dump_annotations(abap, request.sort_fields)
        return [RenderedArtifact(Path(f"{stem}.yaml"), body, _comment_header(request.signature))]

    if request.command == Command.MAKE:
        try:
            framework = UIFramework.parse(request.target).value
        except ConfigurationError as e:
            raise RenderError(str(e)) from e
        if ui_config is None or ui_config.framework != framework:
            raise RenderError(f"No configuration loaded for UI framework: {framework}")
        return render_scaffold(abap, ui_config, request.sort_fields, request.signature)

    raise RenderError(f"Command does not render artifacts: {request.command.value}")


__all__ = ["render"]
