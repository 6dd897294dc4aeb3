"""UI element scaffolding for a UI framework.

Templates come from the framework configuration. Placeholders start with
``~``; a placeholder standing alone on its line is replaced by a possibly
multi-line value, indented like the placeholder.
"""

from __future__ import annotations

import html
import json
import logging
from pathlib import Path
from string import Template
from typing import Any, Dict, List

from lxml import etree

from ..config.schema import UIConfig
from ..domain import AbapObject, Field, Parameter, ParameterKind, RenderedArtifact, initial_value
from ..errors import RenderError
from .naming import class_name, element_id, file_stem, selector

logger = logging.getLogger(__name__)


class ElementTemplate(Template):
    delimiter = "~"


def fill(template: str, **values: Any) -> str:
    """Substitute placeholders line by line, keeping block indentation."""

    lines: List[str] = []
    for line in template.rstrip("\n").splitlines():
        stripped = line.strip()
        key = stripped[1:]
        if stripped.startswith("~") and key in values and "\n" in str(values[key]):
            indent = line[: len(line) - len(line.lstrip())]
            lines.extend(f"{indent}{part}" if part else part for part in str(values[key]).splitlines())
            continue
        try:
            lines.append(ElementTemplate(line).substitute(values))
        except KeyError as e:
            raise RenderError(f"Unknown placeholder ~{e.args[0]} in template line: {line.strip()}") from e
        except ValueError as e:
            raise RenderError(f"Invalid placeholder in template line: {line.strip()}") from e
    return "\n".join(lines)


class ScaffoldRenderer:
    """Render the configured files of one framework for one AbapObject."""

    def __init__(self, config: UIConfig, sort_fields: bool = False) -> None:
        self.config = config
        self.sort_fields = sort_fields

    def _label(self, text: str, fallback: str) -> str:
        label = text or fallback
        return html.escape(label, quote=True) if self.config.escape else label

    def _element(self, element: str, /, **values: Any) -> str:
        try:
            template = self.config.template(element)
        except KeyError as e:
            raise RenderError(str(e.args[0])) from e
        return fill(template, **values)

    def _scalar(self, parameter: Parameter) -> str:
        element = self.config.element_for(parameter.abap_type, parameter.length)
        return self._element(
            element,
            label=self._label(parameter.text, parameter.name),
            binding=fill(self.config.bindings.parameter, param=parameter.name),
            length=parameter.length,
            decimals=parameter.decimals,
            name=parameter.name,
            id=element_id(parameter.name),
            type=parameter.abap_type.value,
        )

    def _field(self, parameter: Parameter, field: Field) -> str:
        element = self.config.element_for(field.abap_type, field.length, field.domain, field.check_table)
        return self._element(
            element,
            label=self._label(field.text, field.name),
            binding=fill(self.config.bindings.field, param=parameter.name, field=field.name),
            length=field.length,
            decimals=field.decimals,
            name=field.name,
            id=element_id(parameter.name, field.name),
            type=field.abap_type.value,
        )

    def _flat_fields(self, abap: AbapObject, parameter: Parameter) -> List[Field]:
        fields = []
        for field in abap.fields_of(parameter, self.sort_fields):
            if field.abap_type.is_nested:
                logger.debug(f"{abap.name}: nested field {parameter.name}-{field.name} not scaffolded")
                continue
            fields.append(field)
        return fields

    def _structure(self, abap: AbapObject, parameter: Parameter) -> str:
        elements = [self._field(parameter, field) for field in self._flat_fields(abap, parameter)]
        return self._element(
            "structure",
            label=self._label(parameter.text, parameter.name),
            binding=fill(self.config.bindings.parameter, param=parameter.name),
            name=parameter.name,
            id=element_id(parameter.name),
            elements="\n".join(elements),
        )

    def _table(self, abap: AbapObject, parameter: Parameter) -> str:
        fields = self._flat_fields(abap, parameter)
        columns = [self._element("column", label=self._label(f.text, f.name), name=f.name) for f in fields]
        cells = [
            self._element(
                "cell",
                binding=fill(self.config.bindings.column, param=parameter.name, field=f.name),
                name=f.name,
            )
            for f in fields
        ]
        return self._element(
            "table",
            label=self._label(parameter.text, parameter.name),
            binding=fill(self.config.bindings.parameter, param=parameter.name),
            name=parameter.name,
            id=element_id(parameter.name),
            columns="\n".join(columns),
            cells="\n".join(cells),
        )

    def elements(self, abap: AbapObject) -> str:
        rendered: List[str] = []
        for parameter in abap.parameters.values():
            if parameter.kind == ParameterKind.SCALAR:
                rendered.append(self._scalar(parameter))
            elif parameter.kind == ParameterKind.STRUCTURE:
                rendered.append(self._structure(abap, parameter))
            elif parameter.kind == ParameterKind.TABLE:
                rendered.append(self._table(abap, parameter))
        return "\n".join(rendered)

    def model(self, abap: AbapObject) -> Dict[str, Any]:
        """Initial values of all parameters."""

        model: Dict[str, Any] = {}
        for parameter in abap.parameters.values():
            if parameter.kind == ParameterKind.STRUCTURE:
                model[parameter.name] = {
                    field.name: initial_value(field.abap_type)
                    for field in abap.fields_of(parameter, self.sort_fields)
                }
            elif parameter.kind == ParameterKind.TABLE:
                model[parameter.name] = []
            elif parameter.kind == ParameterKind.SCALAR:
                model[parameter.name] = initial_value(parameter.abap_type)
        return model

    def render(self, abap: AbapObject, signature: str = "") -> List[RenderedArtifact]:
        stem = file_stem(abap.name)
        model = self.model(abap)
        model_json = json.dumps(model, indent=2, ensure_ascii=False)
        elements = self.elements(abap)

        artifacts: List[RenderedArtifact] = []
        for output in self.config.files:
            path = Path(self.config.framework) / f"{stem}{output.suffix}"
            if output.kind == "model":
                artifacts.append(RenderedArtifact(path=path, body=f"{model_json}\n"))
                continue

            body = fill(
                output.layout,
                elements=elements,
                name=abap.name,
                file=stem,
                text=self._label(abap.text, abap.name),
                model=model_json,
                classname=class_name(abap.name),
                selector=selector(abap.name),
            )
            if output.xml:
                body = _pretty_xml(body, path)
            header = f"{fill(output.comment, signature=signature)}\n" if output.comment and signature else ""
            artifacts.append(RenderedArtifact(path=path, body=body.rstrip("\n") + "\n", header=header))
        return artifacts


def _pretty_xml(body: str, path: Path) -> str:
    parser = etree.XMLParser(remove_blank_text=True)
    try:
        root = etree.fromstring(body.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise RenderError(f"Generated XML is not well-formed: {path}: {e}") from e
    return etree.tostring(root, pretty_print=True, encoding="unicode")


def render_scaffold(
    abap: AbapObject,
    config: UIConfig,
    sort_fields: bool = False,
    signature: str = "",
) -> List[RenderedArtifact]:
    """Render all configured UI files of one function module."""
    return ScaffoldRenderer(config, sort_fields).render(abap, signature)


__all__ = ["ElementTemplate", "ScaffoldRenderer", "fill", "render_scaffold"]
