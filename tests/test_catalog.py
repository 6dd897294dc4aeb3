from __future__ import annotations

import pytest

from abap_api_tools.config import build_worklist, load_catalog, normalize_names
from abap_api_tools.errors import ConfigurationError


def test_names_are_uppercased_and_deduplicated() -> None:
    assert normalize_names(["bapi_test", "BAPI_TEST", " Bapi_Test ", "rfc_ping"]) == ["BAPI_TEST", "RFC_PING"]


def test_direct_names_go_under_empty_key() -> None:
    assert build_worklist(["bapi_test"]) == {"": ["BAPI_TEST"]}


def test_catalog_file_without_suffix(tmp_path) -> None:
    (tmp_path / "user.yaml").write_text("user:\n  - bapi_user_get_detail\n  - BAPI_USER_GET_DETAIL\n", encoding="utf-8")
    assert load_catalog(tmp_path / "user") == {"user": ["BAPI_USER_GET_DETAIL"]}


def test_catalogs_and_names_merge(tmp_path) -> None:
    catalog = tmp_path / "apis.yaml"
    catalog.write_text("user: [bapi_user_get_detail]\norder: [z_order_read]\n", encoding="utf-8")
    worklist = build_worklist(["bapi_test", "bapi_test"], [str(catalog)])
    assert worklist == {
        "user": ["BAPI_USER_GET_DETAIL"],
        "order": ["Z_ORDER_READ"],
        "": ["BAPI_TEST"],
    }


def test_malformed_catalog_is_configuration_error(tmp_path) -> None:
    catalog = tmp_path / "bad.yaml"
    catalog.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(catalog)


def test_catalog_values_must_be_lists(tmp_path) -> None:
    catalog = tmp_path / "bad.yaml"
    catalog.write_text("user:\n  name: BAPI_TEST\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(catalog)


def test_missing_catalog_is_configuration_error(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_catalog(tmp_path / "missing")
