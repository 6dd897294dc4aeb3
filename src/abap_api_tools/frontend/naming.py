"""Naming helpers for generated artifacts."""

from __future__ import annotations

import re


def file_stem(name: str) -> str:
    """File name stem of a function module, namespace slashes replaced."""
    return name.strip().replace("/", "_")


def python_identifier(name: str) -> str:
    """Turn an ABAP dictionary name into a Python variable name."""
    clean = re.sub(r"[^A-Za-z0-9_]", "_", name).strip("_")
    if not clean:
        return "STRUCTURE"
    if not clean[0].isalpha():
        clean = f"S_{clean}"
    return clean.upper()


def class_name(name: str) -> str:
    """BAPI_USER_GET_DETAIL -> BapiUserGetDetail"""
    parts = re.split(r"[^A-Za-z0-9]+", name)
    return "".join(part.capitalize() for part in parts if part) or "Component"


def selector(name: str) -> str:
    """BAPI_USER_GET_DETAIL -> bapi-user-get-detail"""
    return "-".join(part.lower() for part in re.split(r"[^A-Za-z0-9]+", name) if part)


def element_id(*names: str) -> str:
    return "-".join(selector(n) for n in names if n)


__all__ = ["class_name", "element_id", "file_stem", "python_identifier", "selector"]
