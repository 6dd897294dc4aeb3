"""Interpret raw RFC descriptor rows.

Each raw row is resolved once into a ``Parameter`` tagged with its
``ParameterKind`` or into a ``Field``. Types the tool does not know are kept
as ``AbapType.UNKNOWN`` and reported as anomalies instead of failing.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..domain import (
    EXID_TYPES,
    AbapType,
    Field,
    LocalizedText,
    Parameter,
    ParameterClass,
    ParameterKind,
)
from ..errors import FetchError

Row = Dict[str, Any]


def _as_int(value: Any) -> int:
    try:
        return int(str(value).strip() or 0)
    except ValueError:
        return 0


def _text(row: Row, *keys: str) -> str:
    for key in keys:
        value = str(row.get(key, "") or "").strip()
        if value:
            return value
    return ""


def parameter_kind(row: Row) -> ParameterKind:
    """Tag a PARAMS row of RFC_GET_FUNCTION_INTERFACE."""

    paramclass = row.get("PARAMCLASS", "")
    exid = row.get("EXID", "")
    if paramclass == ParameterClass.EXCEPTION.value:
        return ParameterKind.EXCEPTION
    if paramclass == ParameterClass.TABLES.value or exid == "h":
        return ParameterKind.TABLE
    if exid in ("u", "v"):
        return ParameterKind.STRUCTURE
    return ParameterKind.SCALAR


def resolve_parameter(row: Row, locale: str, anomalies: List[str]) -> Parameter:
    name = _text(row, "PARAMETER")
    if not name:
        raise FetchError("Interface row without parameter name")

    try:
        parameter_class = ParameterClass(row.get("PARAMCLASS", ""))
    except ValueError:
        raise FetchError(f"Unknown parameter class of {name}: {row.get('PARAMCLASS')}")

    kind = parameter_kind(row)
    exid = row.get("EXID", "")
    if kind == ParameterKind.EXCEPTION:
        abap_type = AbapType.UNKNOWN
    elif kind == ParameterKind.TABLE:
        abap_type = AbapType.TTYP
    elif kind == ParameterKind.STRUCTURE:
        abap_type = AbapType.STRU
    else:
        abap_type = EXID_TYPES.get(exid, AbapType.UNKNOWN)
        if abap_type == AbapType.UNKNOWN:
            anomalies.append(f"Parameter {name}: unknown internal type '{exid}'")

    type_name = _text(row, "TABNAME")
    fieldname = _text(row, "FIELDNAME")
    if kind == ParameterKind.SCALAR and fieldname:
        type_name = f"{type_name}-{fieldname}"

    return Parameter(
        name=name,
        parameter_class=parameter_class,
        kind=kind,
        abap_type=abap_type,
        type_name=type_name,
        length=_as_int(row.get("INTLENGTH", 0)),
        decimals=_as_int(row.get("DECIMALS", 0)),
        optional=row.get("OPTIONAL", "") == "X",
        default=_text(row, "DEFAULT"),
        label=LocalizedText(locale, _text(row, "PARAMTEXT")),
    )


def resolve_field(row: Row, locale: str, container: str, anomalies: List[str]) -> Field:
    name = _text(row, "FIELDNAME")
    if not name:
        raise FetchError(f"Field without name in {container}")

    datatype = _text(row, "DATATYPE")
    abap_type = AbapType.parse(datatype)
    if abap_type == AbapType.UNKNOWN:
        anomalies.append(f"Field {container}-{name}: unknown type '{datatype}'")

    return Field(
        name=name,
        abap_type=abap_type,
        length=_as_int(row.get("LENG", 0)),
        decimals=_as_int(row.get("DECIMALS", 0)),
        data_element=_text(row, "ROLLNAME"),
        domain=_text(row, "DOMNAME"),
        check_table=_text(row, "CHECKTABLE"),
        label=LocalizedText(locale, _text(row, "FIELDTEXT", "SCRTEXT_M", "REPTEXT")),
    )


__all__ = ["parameter_kind", "resolve_field", "resolve_parameter"]
