"""Resolve, load, install and remove UI framework configuration documents.

Every framework has two YAML documents:

    <ui>.yaml       element templates, output files and binding patterns
    <ui>-abap.yaml  ABAP type to element mapping

Built-in documents ship with the package. A user-local copy in the user
configuration folder takes precedence over the built-in one, per document.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..domain.types import UIFramework
from ..errors import ConfigurationError, ConfigurationExistsError
from .defaults import DefaultFolder
from .schema import Bindings, OutputFile, UIConfig

logger = logging.getLogger(__name__)


class ConfigLocation(str, Enum):
    """Where a configuration document lives."""

    BUILTIN = "builtin"
    USER_LOCAL = "user"


def document_names(ui: str) -> List[str]:
    """File names of the configuration documents of one framework."""
    return [f"{ui}-abap.yaml", f"{ui}.yaml"]


class ConfigResolver:
    """Locate and load UI framework configuration."""

    def __init__(
        self,
        user_dir: Optional[Path] = None,
        builtin_dir: Optional[Path] = None,
    ) -> None:
        self.user_dir = Path(user_dir) if user_dir else DefaultFolder.user_config
        self.builtin_dir = Path(builtin_dir) if builtin_dir else DefaultFolder.configuration / "ui"

    def resolve_config_path(self, ui: str, location: ConfigLocation, abap: bool = False) -> Path:
        """Return the path of a framework document in the given location."""

        framework = UIFramework.parse(ui).value
        file_name = f"{framework}-abap.yaml" if abap else f"{framework}.yaml"
        base = self.builtin_dir if location == ConfigLocation.BUILTIN else self.user_dir
        return base / file_name

    def effective_path(self, ui: str, abap: bool = False) -> Path:
        """User-local document when present, built-in otherwise."""

        local = self.resolve_config_path(ui, ConfigLocation.USER_LOCAL, abap)
        if local.exists():
            logger.debug(f"Using local configuration: {local}")
            return local
        return self.resolve_config_path(ui, ConfigLocation.BUILTIN, abap)

    def load_config(self, ui: str) -> UIConfig:
        """Load and merge both documents of a framework."""

        framework = UIFramework.parse(ui).value
        ui_data = _read_yaml(self.effective_path(framework))
        abap_data = _read_yaml(self.effective_path(framework, abap=True))
        return _build_ui_config(framework, ui_data, abap_data)

    def install_configuration(self, ui: str) -> List[Path]:
        """Copy the built-in documents of a framework to the user folder.

        Existing local documents are never overwritten: the copy uses an
        exclusive create and fails with ``ConfigurationExistsError``.
        """

        framework = UIFramework.parse(ui).value
        self.user_dir.mkdir(parents=True, exist_ok=True)
        installed: List[Path] = []
        for file_name in document_names(framework):
            source = self.builtin_dir / file_name
            target = self.user_dir / file_name
            content = source.read_bytes()
            try:
                with open(target, "xb") as handle:
                    handle.write(content)
            except FileExistsError:
                raise ConfigurationExistsError(target)
            installed.append(target)
        logger.info(f"Local configuration set: {framework}")
        return installed

    def remove_configuration(self, ui: str) -> List[Path]:
        """Delete the user-local documents of a framework, if any."""

        framework = UIFramework.parse(ui).value
        removed: List[Path] = []
        for file_name in document_names(framework):
            target = self.user_dir / file_name
            try:
                target.unlink()
            except FileNotFoundError:
                continue
            removed.append(target)
        logger.info(f"Local configuration removed: {framework}")
        return removed


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid configuration {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")
    return data


def _build_ui_config(framework: str, ui_data: Dict[str, Any], abap_data: Dict[str, Any]) -> UIConfig:
    elements = ui_data.get("elements", {})
    if not isinstance(elements, dict):
        raise ConfigurationError(f"Expected a mapping for elements in {framework} configuration.")

    bindings_data = ui_data.get("bindings") or {}
    defaults = Bindings()
    bindings = Bindings(
        parameter=str(bindings_data.get("parameter", defaults.parameter)),
        field=str(bindings_data.get("field", defaults.field)),
        column=str(bindings_data.get("column", defaults.column)),
    )

    types = abap_data.get("types") or {}
    if not isinstance(types, dict):
        raise ConfigurationError(f"Expected a mapping for types in {framework}-abap configuration.")

    return UIConfig(
        framework=framework,
        elements={str(key): str(value) for key, value in elements.items()},
        files=_parse_files(framework, ui_data.get("files")),
        bindings=bindings,
        escape=bool(ui_data.get("escape", True)),
        types={str(key).upper(): str(value) for key, value in types.items()},
        default_element=str(abap_data.get("default", "input")),
        checkbox_domains=[str(d).upper() for d in abap_data.get("checkbox_domains") or []],
        checkbox_element=abap_data.get("checkbox"),
        valuehelp_element=abap_data.get("valuehelp"),
    )


def _parse_files(framework: str, data: Any) -> List[OutputFile]:
    if not data:
        raise ConfigurationError(f"No output files defined in {framework} configuration.")
    if not isinstance(data, list):
        raise ConfigurationError(f"Expected a list for files in {framework} configuration.")
    files: List[OutputFile] = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("suffix"):
            raise ConfigurationError(f"Each file entry in {framework} configuration needs a 'suffix'.")
        files.append(
            OutputFile(
                suffix=str(entry["suffix"]),
                kind=str(entry.get("kind", "template")),
                layout=str(entry.get("layout", "~elements")),
                comment=str(entry.get("comment", "")),
                xml=bool(entry.get("xml", False)),
            )
        )
    return files


__all__ = ["ConfigLocation", "ConfigResolver", "document_names"]
