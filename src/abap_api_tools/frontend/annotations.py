"""YAML annotation files of function modules.

The get command writes one annotation file per function module. The make
command reads them back, so UI scaffolding does not need a live system.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..domain import (
    AbapObject,
    AbapType,
    Field,
    LocalizedText,
    Parameter,
    ParameterClass,
    ParameterKind,
)
from ..errors import RenderError

logger = logging.getLogger(__name__)


def _label(label: Optional[LocalizedText]) -> Dict[str, str]:
    return label.as_dict() if label else {}


def annotation_data(abap: AbapObject, sort_fields: bool = False) -> Dict[str, Any]:
    """Plain data representation of an AbapObject."""

    parameters: Dict[str, Any] = {}
    for parameter in abap.parameters.values():
        parameters[parameter.name] = {
            "class": parameter.parameter_class.label,
            "kind": parameter.kind.value,
            "type": parameter.abap_type.value,
            "type_name": parameter.type_name,
            "length": parameter.length,
            "decimals": parameter.decimals,
            "optional": parameter.optional,
            "default": parameter.default,
            "label": _label(parameter.label),
        }

    fields: Dict[str, List[Dict[str, Any]]] = {}
    for container, container_fields in abap.fields.items():
        ordered = sorted(container_fields, key=lambda f: f.name) if sort_fields else container_fields
        fields[container] = [
            {
                "name": field.name,
                "type": field.abap_type.value,
                "length": field.length,
                "decimals": field.decimals,
                "data_element": field.data_element,
                "domain": field.domain,
                "check_table": field.check_table,
                "label": _label(field.label),
            }
            for field in ordered
        ]

    stat = {key: list(value) if isinstance(value, (list, tuple)) else value for key, value in abap.stat.items()}
    return {
        "name": abap.name,
        "text": abap.text,
        "locale": abap.locale,
        "parameters": parameters,
        "fields": fields,
        "exceptions": list(abap.exceptions),
        "stat": stat,
    }


def dump_annotations(abap: AbapObject, sort_fields: bool = False) -> str:
    """Render the annotation file body."""
    return yaml.safe_dump(
        annotation_data(abap, sort_fields),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _localized(data: Any, *locales: str) -> Optional[LocalizedText]:
    if not isinstance(data, dict) or not data:
        return None
    for locale in locales:
        if locale and locale in data:
            return LocalizedText(locale, str(data[locale] or ""))
    first_locale = next(iter(data))
    return LocalizedText(str(first_locale), str(data[first_locale] or ""))


def parse_annotations(data: Any, source: str = "annotations", locale: Optional[str] = None) -> AbapObject:
    """Rebuild an AbapObject from annotation data.

    Labels are taken in the requested locale when the annotations carry it,
    in the locale they were retrieved in otherwise.
    """

    if not isinstance(data, dict) or not data.get("name"):
        raise RenderError(f"Invalid annotations: {source}")

    retrieved = str(data.get("locale") or "")
    try:
        parameters = {
            name: Parameter(
                name=str(name),
                parameter_class=ParameterClass[str(item["class"]).upper()],
                kind=ParameterKind(item["kind"]),
                abap_type=AbapType.parse(item.get("type")),
                type_name=str(item.get("type_name") or ""),
                length=int(item.get("length") or 0),
                decimals=int(item.get("decimals") or 0),
                optional=bool(item.get("optional", False)),
                default=str(item.get("default") or ""),
                label=_localized(item.get("label"), locale, retrieved),
            )
            for name, item in (data.get("parameters") or {}).items()
        }
        fields = {
            str(container): tuple(
                Field(
                    name=str(item["name"]),
                    abap_type=AbapType.parse(item.get("type")),
                    length=int(item.get("length") or 0),
                    decimals=int(item.get("decimals") or 0),
                    data_element=str(item.get("data_element") or ""),
                    domain=str(item.get("domain") or ""),
                    check_table=str(item.get("check_table") or ""),
                    label=_localized(item.get("label"), locale, retrieved),
                )
                for item in items or []
            )
            for container, items in (data.get("fields") or {}).items()
        }
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise RenderError(f"Invalid annotations {source}: {e}") from e

    return AbapObject(
        name=str(data["name"]),
        locale=retrieved,
        text=str(data.get("text") or ""),
        parameters=parameters,
        fields=fields,
        exceptions=tuple(str(e) for e in data.get("exceptions") or []),
        stat=data.get("stat") or {},
    )


def load_annotations(path: Path, locale: Optional[str] = None) -> AbapObject:
    """Read an annotation file written by the get command."""

    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError:
        raise RenderError(f"Annotations not found: {path}, run the get command first")
    except OSError as e:
        raise RenderError(f"Cannot read annotations {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RenderError(f"Invalid annotations {path}: {e}") from e

    logger.debug(f"Annotations loaded: {path}")
    return parse_annotations(data, str(path), locale)


__all__ = ["annotation_data", "dump_annotations", "load_annotations", "parse_annotations"]
