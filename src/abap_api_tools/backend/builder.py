"""Build the canonical AbapObject of a function module."""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Any, Dict, List, Sequence, Tuple

from ..domain import AbapObject, Field, Parameter, ParameterKind, sap_language
from ..errors import FetchError
from .descriptors import resolve_field, resolve_parameter
from .fetcher import MetadataFetcher, RawMetadata

logger = logging.getLogger(__name__)


def sort_fields_by_name(fields: Sequence[Field]) -> List[Field]:
    """Stable lexicographic order by field name."""
    return sorted(fields, key=attrgetter("name"))


class ObjectModelBuilder:
    """Backend: turns raw RFC metadata into an ``AbapObject``.

    The builder keeps no state between calls, the same instance serves a
    whole worklist.
    """

    def __init__(self, fetcher: MetadataFetcher) -> None:
        self.fetcher = fetcher

    def build(self, name: str, destination: str, locale: str, sort_fields: bool = False) -> AbapObject:
        name = (name or "").strip().upper()
        if not name:
            raise FetchError("Function module name is empty")
        sap_language(locale)

        logger.debug(f"backend run {name}")
        raw = self.fetcher.fetch_descriptors(name, destination, locale)
        return assemble(raw, locale, sort_fields)


def assemble(raw: RawMetadata, locale: str, sort_fields: bool = False) -> AbapObject:
    """Resolve raw descriptors into the canonical model."""

    anomalies: List[str] = []
    parameters: Dict[str, Parameter] = {}
    exceptions: List[str] = []

    for row in raw.parameters:
        parameter = resolve_parameter(row, locale, anomalies)
        if parameter.kind == ParameterKind.EXCEPTION:
            exceptions.append(parameter.name)
            continue
        parameters[parameter.name] = parameter

    fields: Dict[str, Tuple[Field, ...]] = {}
    for container, rows in raw.fields.items():
        resolved = [resolve_field(row, locale, container, anomalies) for row in rows]
        if sort_fields:
            resolved = sort_fields_by_name(resolved)
        fields[container] = tuple(resolved)

    for parameter in parameters.values():
        if parameter.kind in (ParameterKind.STRUCTURE, ParameterKind.TABLE) and parameter.type_name not in fields:
            anomalies.append(f"Parameter {parameter.name}: no fields for {parameter.type_name}")
            fields[parameter.type_name] = ()

    stat = _statistics(parameters, exceptions, fields, anomalies)
    for anomaly in anomalies:
        logger.warning(f"{raw.name}: {anomaly}")
    logger.debug(f"{raw.name}: {stat}")

    return AbapObject(
        name=raw.name,
        locale=locale,
        text=raw.text,
        parameters=parameters,
        fields=fields,
        exceptions=tuple(exceptions),
        stat=stat,
    )


def _statistics(
    parameters: Dict[str, Parameter],
    exceptions: List[str],
    fields: Dict[str, Tuple[Field, ...]],
    anomalies: List[str],
) -> Dict[str, Any]:
    kinds = [p.kind for p in parameters.values()]
    return {
        "parameters": len(parameters),
        "scalar": kinds.count(ParameterKind.SCALAR),
        "structure": kinds.count(ParameterKind.STRUCTURE),
        "table": kinds.count(ParameterKind.TABLE),
        "exception": len(exceptions),
        "structures": len(fields),
        "fields": sum(len(f) for f in fields.values()),
        "anomalies": tuple(anomalies),
    }


def build(
    name: str,
    destination: str,
    locale: str,
    sort_fields: bool,
    fetcher: MetadataFetcher,
) -> AbapObject:
    """Fetch and build the model of one function module."""
    return ObjectModelBuilder(fetcher).build(name, destination, locale, sort_fields)


__all__ = ["ObjectModelBuilder", "assemble", "build", "sort_fields_by_name"]
