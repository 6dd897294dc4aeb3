"""Canonical models shared by the backend and frontend."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import ErrorKind
from .types import AbapType, Command, ParameterClass, ParameterKind


@dataclass(frozen=True, slots=True)
class LocalizedText:
    """A text read from the ABAP system in one language."""

    locale: str
    text: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {self.locale: self.text}


@dataclass(frozen=True, slots=True)
class Parameter:
    """Function module parameter.

    ``kind`` is the union tag: scalars carry their own type and length,
    structures and tables reference their line type in ``type_name``, which
    is also the key of their fields in ``AbapObject.fields``.
    """

    name: str
    parameter_class: ParameterClass
    kind: ParameterKind
    abap_type: AbapType = AbapType.UNKNOWN
    type_name: str = ""
    length: int = 0
    decimals: int = 0
    optional: bool = False
    default: str = ""
    label: Optional[LocalizedText] = None

    @property
    def text(self) -> str:
        return self.label.text if self.label else ""


@dataclass(frozen=True, slots=True)
class Field:
    """Structure or table line field (one DFIES row)."""

    name: str
    abap_type: AbapType
    length: int = 0
    decimals: int = 0
    data_element: str = ""
    domain: str = ""
    check_table: str = ""
    label: Optional[LocalizedText] = None

    @property
    def text(self) -> str:
        return self.label.text if self.label else ""


@dataclass(frozen=True, slots=True)
class AbapObject:
    """Root model of one remote function module.

    Produced by the backend, consumed read-only by every renderer.
    """

    name: str
    locale: str = ""
    text: str = ""
    parameters: Mapping[str, Parameter] = field(default_factory=dict)
    fields: Mapping[str, Tuple[Field, ...]] = field(default_factory=dict)
    exceptions: Tuple[str, ...] = ()
    stat: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
        object.__setattr__(
            self,
            "fields",
            MappingProxyType({key: tuple(value) for key, value in self.fields.items()}),
        )
        object.__setattr__(self, "exceptions", tuple(self.exceptions))
        object.__setattr__(
            self,
            "stat",
            MappingProxyType({key: tuple(value) if isinstance(value, list) else value for key, value in self.stat.items()}),
        )

    def parameters_of(self, parameter_class: ParameterClass) -> List[Parameter]:
        return [p for p in self.parameters.values() if p.parameter_class == parameter_class]

    def fields_of(self, parameter: Parameter, sort_fields: bool = False) -> List[Field]:
        """Return the line fields of a structure or table parameter."""
        fields = list(self.fields.get(parameter.type_name, ()))
        if sort_fields:
            fields = sorted(fields, key=lambda f: f.name)
        return fields


@dataclass(frozen=True, slots=True)
class RunSignature:
    """Provenance string embedded into artifact headers."""

    program: str
    version: str
    timestamp: str

    @classmethod
    def capture(cls, program: str, version: str, now: Optional[datetime] = None) -> "RunSignature":
        moment = now or datetime.now()
        return cls(
            program=Path(program).name,
            version=version,
            timestamp=moment.strftime("%Y-%m-%d %H:%M:%S"),
        )

    def __str__(self) -> str:
        return f"{self.program} {self.version} at: {self.timestamp}"


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Everything the pipeline needs to process one worklist name."""

    command: Command
    target: str
    name: str = ""
    catalog: str = ""
    locale: str = "en"
    output_dir: Optional[Path] = None
    save: bool = False
    sort_fields: bool = False
    signature: str = ""
    annotations_dir: Optional[Path] = None

    def annotation_source(self) -> Path:
        """Folder holding the annotation files read by the make command."""
        return self.annotations_dir or self.output_dir or Path(".")


@dataclass(frozen=True, slots=True)
class RenderedArtifact:
    """A generated file: relative path, provenance header and body."""

    path: Path
    body: str
    header: str = ""

    @property
    def text(self) -> str:
        return f"{self.header}{self.body}"


@dataclass(frozen=True, slots=True)
class EntryResult:
    """Outcome of processing one worklist name."""

    catalog: str
    name: str
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    artifacts: Tuple[Path, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error_kind is None


@dataclass
class RunReport:
    """Collected entry results of one run."""

    results: List[EntryResult] = field(default_factory=list)

    @property
    def failed(self) -> List[EntryResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def add(self, result: EntryResult) -> None:
        self.results.append(result)


Worklist = Dict[str, List[str]]

__all__ = [
    "AbapObject",
    "EntryResult",
    "Field",
    "GenerationRequest",
    "LocalizedText",
    "Parameter",
    "RenderedArtifact",
    "RunReport",
    "RunSignature",
    "Worklist",
]
