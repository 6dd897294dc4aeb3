"""Read function module metadata from an ABAP system over RFC.

The fetcher works with any pyrfc style connection object, which exposes
``call(function_name, **parameters) -> dict``. Connections are opened per
destination through a connection factory; the default one uses
``pyrfc.Connection(dest=...)`` and therefore the ``sapnwrfc.ini`` file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Set

from ..domain.types import sap_language
from ..errors import FetchError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
ConnectionFactory = Callable[[str], Any]

# Internal types of structure and table parameters (EXID)
STRUCTURE_EXIDS = {"u", "v"}
TABLE_EXIDS = {"h"}


@dataclass
class RawMetadata:
    """Descriptors as returned by the ABAP system, not yet interpreted."""

    name: str
    text: str = ""
    parameters: List[Row] = field(default_factory=list)  # RFC_GET_FUNCTION_INTERFACE PARAMS
    fields: Dict[str, List[Row]] = field(default_factory=dict)  # container -> DFIES rows


class MetadataFetcher(Protocol):
    def fetch_descriptors(self, name: str, destination: str, locale: str) -> RawMetadata:
        ...


def open_connection(destination: str) -> Any:
    """Open a pyrfc connection to a destination from ``sapnwrfc.ini``."""

    try:
        from pyrfc import Connection
    except ImportError as e:
        raise FetchError("pyrfc is not installed, install abap-api-tools[rfc] for RFC access") from e

    try:
        return Connection(dest=destination)
    except Exception as e:
        raise FetchError(f"Destination not reachable: {destination}: {e}") from e


class RfcMetadataFetcher:
    """Metadata fetcher over RFC.

    One connection per destination is opened on first use and kept until
    ``close()``.
    """

    def __init__(self, connection_factory: Optional[ConnectionFactory] = None) -> None:
        self._connection_factory = connection_factory or open_connection
        self._connections: Dict[str, Any] = {}

    def __enter__(self) -> "RfcMetadataFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def connection(self, destination: str) -> Any:
        if destination not in self._connections:
            logger.debug(f"Opening connection: {destination}")
            self._connections[destination] = self._connection_factory(destination)
        return self._connections[destination]

    def close(self) -> None:
        for destination, connection in self._connections.items():
            close = getattr(connection, "close", None)
            if close is not None:
                logger.debug(f"Closing connection: {destination}")
                close()
        self._connections.clear()

    def fetch_descriptors(self, name: str, destination: str, locale: str) -> RawMetadata:
        """Read parameters, field structures and texts of a function module."""

        language = sap_language(locale)
        connection = self.connection(destination)

        found = _call(connection, "RFC_FUNCTION_SEARCH", FUNCNAME=name, LANGUAGE=language)
        functions = [row for row in found.get("FUNCTIONS", []) if str(row.get("FUNCNAME", "")).upper() == name]
        if not functions:
            raise FetchError(f"Function module not found: {name}")

        interface = _call(
            connection,
            "RFC_GET_FUNCTION_INTERFACE",
            FUNCNAME=name,
            LANGUAGE=language,
            NONE_UNICODE_LENGTH="X",
        )
        raw = RawMetadata(
            name=name,
            text=str(functions[0].get("STEXT", "")),
            parameters=list(interface.get("PARAMS", [])),
        )

        visited: Set[str] = set()
        for row in raw.parameters:
            if row.get("PARAMCLASS") == "X":
                continue
            exid = row.get("EXID", "")
            tabname = str(row.get("TABNAME", ""))
            if not tabname:
                continue
            # TABLES parameters carry the line structure in TABNAME, even with EXID h
            if row.get("PARAMCLASS") == "T" or exid in STRUCTURE_EXIDS:
                self._collect_fields(connection, tabname, False, language, raw.fields, visited)
            elif exid in TABLE_EXIDS:
                self._collect_fields(connection, tabname, True, language, raw.fields, visited)

        logger.debug(f"{name}: {len(raw.parameters)} parameters, {len(raw.fields)} structures fetched")
        return raw

    def _collect_fields(
        self,
        connection: Any,
        container: str,
        table_type: bool,
        language: str,
        fields: Dict[str, List[Row]],
        visited: Set[str],
    ) -> None:
        if container in visited:
            return
        visited.add(container)

        line_type = _row_type(connection, container, language) if table_type else container
        result = _call(connection, "DDIF_FIELDINFO_GET", TABNAME=line_type, LANGU=language, ALL_TYPES="X")
        rows = list(result.get("DFIES_TAB", []))
        fields[container] = rows

        for row in rows:
            datatype = str(row.get("DATATYPE", "")).upper()
            nested = str(row.get("ROLLNAME", ""))
            if datatype in ("STRU", "TTYP") and nested:
                self._collect_fields(connection, nested, datatype == "TTYP", language, fields, visited)


def _row_type(connection: Any, table_type: str, language: str) -> str:
    result = _call(connection, "DDIF_TTYP_GET", NAME=table_type, STATE="A", LANGU=language)
    row_type = str(result.get("DD40V_WA", {}).get("ROWTYPE", ""))
    if not row_type:
        raise FetchError(f"Row type not found for table type: {table_type}")
    return row_type


def _call(connection: Any, function: str, **parameters: Any) -> Dict[str, Any]:
    try:
        return connection.call(function, **parameters)
    except FetchError:
        raise
    except Exception as e:
        raise FetchError(f"{function} failed: {e}") from e


__all__ = [
    "ConnectionFactory",
    "MetadataFetcher",
    "RawMetadata",
    "RfcMetadataFetcher",
    "open_connection",
]
