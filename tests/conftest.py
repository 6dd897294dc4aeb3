"""
Shared pytest fixtures.

Provides:
    - rfc_system: fake pyrfc style connection with a few function modules
    - fetcher: RfcMetadataFetcher bound to the fake connection
    - resolver: ConfigResolver with a temporary user configuration folder
    - make_request: GenerationRequest factory
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from abap_api_tools.backend import RfcMetadataFetcher
from abap_api_tools.config import ConfigResolver
from abap_api_tools.domain import Command, GenerationRequest
from abap_api_tools.errors import FetchError


def _param(paramclass: str, name: str, exid: str, tabname: str = "", **extra: Any) -> Dict[str, Any]:
    row = {
        "PARAMCLASS": paramclass,
        "PARAMETER": name,
        "TABNAME": tabname,
        "FIELDNAME": "",
        "EXID": exid,
        "POSITION": 0,
        "OFFSET": 0,
        "INTLENGTH": 0,
        "DECIMALS": 0,
        "DEFAULT": "",
        "PARAMTEXT": "",
        "OPTIONAL": "",
    }
    row.update(extra)
    return row


def _field(name: str, datatype: str, leng: int, text: str, **extra: Any) -> Dict[str, Any]:
    row = {
        "FIELDNAME": name,
        "DATATYPE": datatype,
        "LENG": f"{leng:06d}",
        "DECIMALS": "000000",
        "FIELDTEXT": text,
        "ROLLNAME": "",
        "DOMNAME": "",
        "CHECKTABLE": "",
    }
    row.update(extra)
    return row


FUNCTIONS: Dict[str, Dict[str, Any]] = {
    "BAPI_TEST": {
        "text": "Test BAPI",
        "params": [
            _param("I", "IMPORT_PARAM", "C", INTLENGTH=10, PARAMTEXT="Import parameter"),
        ],
    },
    "BAPI_USER_GET_DETAIL": {
        "text": "Read user details",
        "params": [
            _param("I", "USERNAME", "C", "BAPIBNAME", FIELDNAME="BAPIBNAME", INTLENGTH=12, PARAMTEXT="User Name"),
            _param("I", "CACHE_RESULTS", "C", "BAPIFLAG", INTLENGTH=1, OPTIONAL="X", DEFAULT="SPACE"),
            _param("E", "ADDRESS", "u", "BAPIADDR3", PARAMTEXT="Address Data"),
            _param("T", "RETURN", "h", "BAPIRET2", PARAMTEXT="Return Structure"),
            _param("X", "USER_NOT_FOUND", ""),
        ],
    },
    "Z_ORDER_READ": {
        "text": "Read order & items",
        "params": [
            _param("I", "ORDER_ID", "N", "VBELN", INTLENGTH=10, PARAMTEXT="Order"),
            _param("I", "NET_VALUE", "P", "NETWR", INTLENGTH=15, DECIMALS=2, PARAMTEXT="Net Value"),
            _param("I", "ODD", "?", PARAMTEXT="Odd typed"),
            _param("E", "HEADER", "u", "ZORDER_HEADER", PARAMTEXT="Header"),
            _param("E", "ITEMS", "h", "ZORDER_ITEMS", PARAMTEXT="Items"),
        ],
    },
}

STRUCTURES: Dict[str, List[Dict[str, Any]]] = {
    "BAPIADDR3": [
        _field("TITLE_P", "CHAR", 30, "Title"),
        _field("FIRSTNAME", "CHAR", 40, "First name"),
        _field("LASTNAME", "CHAR", 40, "Last name"),
        _field("BIRTH_DATE", "DATS", 8, "Date of Birth"),
    ],
    "BAPIRET2": [
        _field("TYPE", "CHAR", 1, "Message type", DOMNAME="BAPI_MTYPE"),
        _field("ID", "CHAR", 20, "Message Class"),
        _field("NUMBER", "NUMC", 3, "Message Number"),
        _field("MESSAGE", "CHAR", 220, "Message Text"),
    ],
    "ZORDER_HEADER": [
        _field("VBELN", "CHAR", 10, "Order", CHECKTABLE="VBAK"),
        _field("ERDAT", "DATS", 8, "Created on"),
        _field("NETWR", "CURR", 15, "Net value", DECIMALS="000002"),
        _field("BLOCKED", "CHAR", 1, "Blocked", DOMNAME="XFELD"),
        _field("PARTNER", "STRU", 0, "Partner", ROLLNAME="ZPARTNER"),
        _field("WEIRD", "ZZZZ", 4, "Weird"),
    ],
    "ZPARTNER": [
        _field("PARVW", "CHAR", 2, "Partner function"),
        _field("KUNNR", "CHAR", 10, "Customer"),
    ],
    "ZORDER_ITEM": [
        _field("POSNR", "NUMC", 6, "Item"),
        _field("MATNR", "CHAR", 40, "Material"),
        _field("KWMENG", "QUAN", 15, "Quantity", DECIMALS="000003"),
    ],
}

TABLE_TYPES: Dict[str, str] = {"ZORDER_ITEMS": "ZORDER_ITEM"}


class FakeConnection:
    """Answers the RFC calls the metadata fetcher makes."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []
        self.closed = False

    def call(self, function: str, **params: Any) -> Dict[str, Any]:
        self.calls.append((function, params))
        if function == "RFC_FUNCTION_SEARCH":
            name = params["FUNCNAME"]
            if name not in FUNCTIONS:
                return {"FUNCTIONS": []}
            return {"FUNCTIONS": [{"FUNCNAME": name, "GROUPNAME": "ZTEST", "STEXT": FUNCTIONS[name]["text"]}]}
        if function == "RFC_GET_FUNCTION_INTERFACE":
            return {"PARAMS": [dict(row) for row in FUNCTIONS[params["FUNCNAME"]]["params"]]}
        if function == "DDIF_FIELDINFO_GET":
            tabname = params["TABNAME"]
            if tabname not in STRUCTURES:
                raise RuntimeError(f"NOT_FOUND {tabname}")
            return {"DFIES_TAB": [dict(row) for row in STRUCTURES[tabname]]}
        if function == "DDIF_TTYP_GET":
            return {"DD40V_WA": {"TYPENAME": params["NAME"], "ROWTYPE": TABLE_TYPES[params["NAME"]]}}
        raise RuntimeError(f"Unexpected RFC call {function}")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def rfc_system() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def fetcher(rfc_system: FakeConnection) -> RfcMetadataFetcher:
    def connect(destination: str) -> FakeConnection:
        if destination != "MME":
            raise FetchError(f"Destination not reachable: {destination}")
        return rfc_system

    return RfcMetadataFetcher(connect)


@pytest.fixture
def resolver(tmp_path) -> ConfigResolver:
    return ConfigResolver(user_dir=tmp_path / "config")


@pytest.fixture
def make_request():
    def factory(command: Command = Command.GET, target: str = "MME", **kwargs: Any) -> GenerationRequest:
        kwargs.setdefault("signature", "abap 0.1.0 at: 2026-10-19 10:00:00")
        return GenerationRequest(command=command, target=target, **kwargs)

    return factory
