"""ABAP domain models module."""

from .models import (
    AbapObject,
    EntryResult,
    Field,
    GenerationRequest,
    LocalizedText,
    Parameter,
    RenderedArtifact,
    RunReport,
    RunSignature,
    Worklist,
)
from .types import (
    EXID_TYPES,
    LANGUAGES,
    AbapType,
    Command,
    ParameterClass,
    ParameterKind,
    UIFramework,
    initial_value,
    sap_language,
)

__all__ = [
    # Models
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
    # Types
    "EXID_TYPES",
    "LANGUAGES",
    "AbapType",
    "Command",
    "ParameterClass",
    "ParameterKind",
    "UIFramework",
    "initial_value",
    "sap_language",
]
