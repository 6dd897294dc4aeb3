"""Configuration models for UI framework scaffolding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..domain.types import AbapType


@dataclass(slots=True)
class OutputFile:
    """One file emitted per function module by the make command."""

    suffix: str
    kind: str = "template"  # 'template' or 'model'
    layout: str = "~elements"
    comment: str = ""  # Header comment pattern, '~' is replaced by the run signature
    xml: bool = False


@dataclass(slots=True)
class Bindings:
    """Data binding path patterns."""

    parameter: str = "~param"
    field: str = "~param.~field"
    column: str = "~field"


@dataclass(slots=True)
class UIConfig:
    """Merged ``<ui>.yaml`` and ``<ui>-abap.yaml`` documents of one framework."""

    framework: str
    elements: Dict[str, str] = field(default_factory=dict)
    files: List[OutputFile] = field(default_factory=list)
    bindings: Bindings = field(default_factory=Bindings)
    escape: bool = True
    # ABAP -> element mapping
    types: Dict[str, str] = field(default_factory=dict)
    default_element: str = "input"
    checkbox_domains: List[str] = field(default_factory=list)
    checkbox_element: Optional[str] = None
    valuehelp_element: Optional[str] = None

    def element_for(
        self,
        abap_type: AbapType,
        length: int = 0,
        domain: str = "",
        check_table: str = "",
    ) -> str:
        """Select the element template name for a field of the given type."""

        if self.checkbox_element and domain and domain.upper() in self.checkbox_domains:
            return self.checkbox_element
        if self.checkbox_element and abap_type == AbapType.CHAR and length == 1 and not domain:
            return self.checkbox_element
        if self.valuehelp_element and check_table:
            return self.valuehelp_element
        return self.types.get(abap_type.value, self.default_element)

    def template(self, element: str) -> str:
        try:
            return self.elements[element]
        except KeyError:
            raise KeyError(f"Element template not found in {self.framework} configuration: {element}")


__all__ = ["Bindings", "OutputFile", "UIConfig"]
