from __future__ import annotations

import dataclasses

import pytest

from abap_api_tools.backend import ObjectModelBuilder, build
from abap_api_tools.domain import AbapType, ParameterClass, ParameterKind
from abap_api_tools.errors import ConfigurationError, FetchError


def test_scalar_only_function_module(fetcher) -> None:
    abap = build("bapi_test", "MME", "en", False, fetcher)

    assert abap.name == "BAPI_TEST"
    assert abap.text == "Test BAPI"
    assert list(abap.parameters) == ["IMPORT_PARAM"]
    assert dict(abap.fields) == {}

    parameter = abap.parameters["IMPORT_PARAM"]
    assert parameter.parameter_class == ParameterClass.IMPORT
    assert parameter.kind == ParameterKind.SCALAR
    assert parameter.abap_type == AbapType.CHAR
    assert parameter.length == 10
    assert parameter.label.locale == "en"
    assert parameter.text == "Import parameter"


def test_parameter_kinds_and_exceptions(fetcher) -> None:
    abap = build("BAPI_USER_GET_DETAIL", "MME", "en", False, fetcher)

    kinds = {name: p.kind for name, p in abap.parameters.items()}
    assert kinds == {
        "USERNAME": ParameterKind.SCALAR,
        "CACHE_RESULTS": ParameterKind.SCALAR,
        "ADDRESS": ParameterKind.STRUCTURE,
        "RETURN": ParameterKind.TABLE,
    }
    assert abap.exceptions == ("USER_NOT_FOUND",)
    assert abap.parameters["USERNAME"].type_name == "BAPIBNAME-BAPIBNAME"
    assert abap.parameters["CACHE_RESULTS"].optional is True
    assert abap.parameters["CACHE_RESULTS"].default == "SPACE"
    assert set(abap.fields) == {"BAPIADDR3", "BAPIRET2"}


def test_fields_keep_backend_order_without_sorting(fetcher) -> None:
    abap = build("BAPI_USER_GET_DETAIL", "MME", "en", False, fetcher)
    assert [f.name for f in abap.fields["BAPIADDR3"]] == ["TITLE_P", "FIRSTNAME", "LASTNAME", "BIRTH_DATE"]


def test_fields_sorted_by_name(fetcher) -> None:
    abap = build("BAPI_USER_GET_DETAIL", "MME", "en", True, fetcher)
    for fields in abap.fields.values():
        names = [f.name for f in fields]
        assert names == sorted(names)
    assert [f.name for f in abap.fields["BAPIRET2"]] == ["ID", "MESSAGE", "NUMBER", "TYPE"]


def test_table_types_and_nested_structures_are_flattened(fetcher, rfc_system) -> None:
    abap = build("Z_ORDER_READ", "MME", "en", False, fetcher)

    assert set(abap.fields) == {"ZORDER_HEADER", "ZPARTNER", "ZORDER_ITEMS"}
    assert [f.name for f in abap.fields["ZORDER_ITEMS"]] == ["POSNR", "MATNR", "KWMENG"]
    assert abap.parameters["ITEMS"].kind == ParameterKind.TABLE
    assert ("DDIF_TTYP_GET", {"NAME": "ZORDER_ITEMS", "STATE": "A", "LANGU": "E"}) in rfc_system.calls

    netwr = next(f for f in abap.fields["ZORDER_HEADER"] if f.name == "NETWR")
    assert (netwr.abap_type, netwr.length, netwr.decimals) == (AbapType.CURR, 15, 2)


def test_unknown_types_are_recorded_not_fatal(fetcher) -> None:
    abap = build("Z_ORDER_READ", "MME", "en", False, fetcher)

    assert abap.parameters["ODD"].abap_type == AbapType.UNKNOWN
    weird = next(f for f in abap.fields["ZORDER_HEADER"] if f.name == "WEIRD")
    assert weird.abap_type == AbapType.UNKNOWN
    assert len(abap.stat["anomalies"]) == 2


def test_statistics(fetcher) -> None:
    abap = build("Z_ORDER_READ", "MME", "en", False, fetcher)
    assert abap.stat["parameters"] == 5
    assert abap.stat["scalar"] == 3
    assert abap.stat["structure"] == 1
    assert abap.stat["table"] == 1
    assert abap.stat["structures"] == 3
    assert abap.stat["fields"] == 11


def test_model_is_read_only(fetcher) -> None:
    abap = build("BAPI_TEST", "MME", "en", False, fetcher)
    with pytest.raises(TypeError):
        abap.parameters["OTHER"] = abap.parameters["IMPORT_PARAM"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        abap.name = "OTHER"


def test_statistics_are_read_only(fetcher) -> None:
    abap = build("Z_ORDER_READ", "MME", "en", False, fetcher)
    anomalies = abap.stat["anomalies"]
    with pytest.raises(AttributeError):
        anomalies.append("added")
    assert len(abap.stat["anomalies"]) == 2


def test_tables_parameter_reads_line_structure(fetcher, rfc_system) -> None:
    abap = build("BAPI_USER_GET_DETAIL", "MME", "en", False, fetcher)

    assert abap.parameters["RETURN"].kind == ParameterKind.TABLE
    assert [f.name for f in abap.fields["BAPIRET2"]] == ["TYPE", "ID", "NUMBER", "MESSAGE"]
    assert not [call for call in rfc_system.calls if call[0] == "DDIF_TTYP_GET"]


def test_unknown_function_module(fetcher) -> None:
    with pytest.raises(FetchError, match="not found"):
        build("Z_DOES_NOT_EXIST", "MME", "en", False, fetcher)


def test_unreachable_destination(fetcher) -> None:
    with pytest.raises(FetchError, match="not reachable"):
        build("BAPI_TEST", "NOWHERE", "en", False, fetcher)


def test_connector_errors_are_wrapped(fetcher, monkeypatch, rfc_system) -> None:
    def broken(function, **params):
        raise RuntimeError("RFC_COMMUNICATION_FAILURE")

    monkeypatch.setattr(rfc_system, "call", broken)
    with pytest.raises(FetchError, match="RFC_COMMUNICATION_FAILURE"):
        build("BAPI_TEST", "MME", "en", False, fetcher)


def test_unsupported_locale(fetcher) -> None:
    with pytest.raises(ConfigurationError):
        ObjectModelBuilder(fetcher).build("BAPI_TEST", "MME", "xx", False)


def test_texts_requested_in_locale_language(fetcher, rfc_system) -> None:
    build("BAPI_TEST", "MME", "de", False, fetcher)
    function, params = rfc_system.calls[0]
    assert function == "RFC_FUNCTION_SEARCH"
    assert params["LANGUAGE"] == "D"
