"""Python (pyrfc) call template of a function module."""

from __future__ import annotations

import json
from typing import Dict, List

from ..domain import AbapObject, Field, Parameter, ParameterClass, ParameterKind, initial_value
from .naming import python_identifier

INDENT = "    "

_INPUT_CLASSES = (ParameterClass.IMPORT, ParameterClass.CHANGING, ParameterClass.TABLES)
_RESULT_CLASSES = (ParameterClass.EXPORT, ParameterClass.CHANGING, ParameterClass.TABLES)


def _literal(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def _type_info(abap_type: str, length: int, decimals: int) -> str:
    if not length:
        return abap_type
    if decimals:
        return f"{abap_type} ({length},{decimals})"
    return f"{abap_type} ({length})"


def _parameter_comment(parameter: Parameter) -> str:
    if parameter.kind == ParameterKind.SCALAR:
        info = _type_info(parameter.abap_type.value, parameter.length, parameter.decimals)
        parts = [f"{parameter.type_name} {info}".strip()]
    else:
        parts = [f"{parameter.type_name} {parameter.kind.value}".strip()]
    if parameter.default:
        parts.append(f"default: {parameter.default}")
    if parameter.text:
        parts.append(parameter.text)
    return " ".join(parts)


def _field_comment(field: Field) -> str:
    info = _type_info(field.abap_type.value, field.length, field.decimals)
    return " ".join(part for part in (field.data_element, info, field.text) if part)


def _parameter_value(parameter: Parameter, structures: Dict[str, str]) -> str:
    if parameter.kind == ParameterKind.STRUCTURE:
        return f"dict({structures[parameter.type_name]})"
    if parameter.kind == ParameterKind.TABLE:
        return "[]"
    return _literal(initial_value(parameter.abap_type))


def render_call_template(abap: AbapObject, sort_fields: bool = False) -> str:
    """Render the call template body."""

    lines: List[str] = []
    parameters = list(abap.parameters.values())
    kinds = [p.kind for p in parameters]

    lines.append("#")
    lines.append(
        f"# {abap.name}"
        f"  scalar: {kinds.count(ParameterKind.SCALAR)}"
        f"  structure: {kinds.count(ParameterKind.STRUCTURE)}"
        f"  table: {kinds.count(ParameterKind.TABLE)}"
        f"  exception: {len(abap.exceptions)}"
    )
    if abap.text:
        lines.append(f"# {abap.text}")
    lines.append("#")
    lines.append("")

    # Line types of structures and tables, referenced by the parameters below
    structures: Dict[str, str] = {}
    used = [p for p in parameters if p.kind in (ParameterKind.STRUCTURE, ParameterKind.TABLE)]
    for parameter in used:
        if parameter.type_name in structures:
            continue
        variable = python_identifier(parameter.type_name)
        structures[parameter.type_name] = variable
        users = ", ".join(p.name for p in used if p.type_name == parameter.type_name)
        lines.append(f"# {parameter.type_name} ({users})")
        lines.append(f"{variable} = {{")
        for field in abap.fields_of(parameter, sort_fields):
            lines.append(f"{INDENT}{_literal(field.name)}: {_literal(initial_value(field.abap_type))},  # {_field_comment(field)}")
        lines.append("}")
        lines.append("")

    lines.append("parameters = {")
    for parameter_class in _INPUT_CLASSES:
        members = [p for p in parameters if p.parameter_class == parameter_class]
        if not members:
            continue
        lines.append(f"{INDENT}# {parameter_class.label.upper()} PARAMETERS")
        for parameter in members:
            entry = f"{_literal(parameter.name)}: {_parameter_value(parameter, structures)},"
            comment = _parameter_comment(parameter)
            if parameter.optional:
                lines.append(f"{INDENT}# {entry}  # optional, {comment}")
            else:
                lines.append(f"{INDENT}{entry}  # {comment}")
    lines.append("}")
    lines.append("")
    lines.append(f"result = client.call({_literal(abap.name)}, **parameters)")

    results = [p for p in parameters if p.parameter_class in _RESULT_CLASSES]
    if results:
        lines.append("")
        for parameter_class in _RESULT_CLASSES:
            members = [p for p in results if p.parameter_class == parameter_class]
            if not members:
                continue
            lines.append(f"# {parameter_class.label.upper()} RESULTS")
            for parameter in members:
                lines.append(f"{python_identifier(parameter.name)} = result[{_literal(parameter.name)}]  # {_parameter_comment(parameter)}")

    if abap.exceptions:
        lines.append("")
        lines.append(f"# EXCEPTIONS: {', '.join(abap.exceptions)}")

    return "\n".join(lines) + "\n"


__all__ = ["render_call_template"]
