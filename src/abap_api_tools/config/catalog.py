"""Build the worklist of function module names.

Names come from the command line and from catalog files. A catalog file is
a YAML mapping of catalog key to a list of names:

    user:
      - BAPI_USER_GET_DETAIL
      - BAPI_USER_CHANGE

Names given on the command line are collected under the empty key.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from ..domain.models import Worklist
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def normalize_names(names: Iterable[str]) -> List[str]:
    """Uppercase names and drop duplicates, keeping first-seen order."""

    seen: Dict[str, None] = {}
    for name in names:
        cleaned = str(name).strip().upper()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def load_catalog(path: str | Path) -> Worklist:
    """Load one catalog file. The ``.yaml`` suffix may be omitted."""

    catalog_path = Path(path)
    if ".yaml" not in catalog_path.name.lower():
        catalog_path = catalog_path.with_name(f"{catalog_path.name}.yaml")

    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except OSError as e:
        raise ConfigurationError(f"Catalog not readable: {catalog_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid catalog {catalog_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Catalog root must be a mapping: {catalog_path}")

    worklist: Worklist = {}
    for key, names in data.items():
        if names is None:
            names = []
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list):
            raise ConfigurationError(f"Expected a list of names for catalog key '{key}' in {catalog_path}")
        worklist[str(key)] = normalize_names(names)
    logger.debug(f"Catalog {catalog_path}: {sum(len(v) for v in worklist.values())} names")
    return worklist


def build_worklist(
    names: Optional[Iterable[str]] = None,
    catalogs: Optional[Iterable[str | Path]] = None,
) -> Worklist:
    """Merge catalog files and direct names into one worklist."""

    worklist: Worklist = {}
    for catalog in catalogs or []:
        for key, catalog_names in load_catalog(catalog).items():
            worklist[key] = normalize_names(worklist.get(key, []) + catalog_names)

    direct = normalize_names(names or [])
    if direct:
        worklist[""] = normalize_names(worklist.get("", []) + direct)
    return worklist


__all__ = ["build_worklist", "load_catalog", "normalize_names"]
