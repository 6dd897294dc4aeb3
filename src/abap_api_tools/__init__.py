"""
ABAP API Tools

Introspect ABAP function module metadata over RFC and generate call
templates, annotation files and UI scaffolding from it.

Architecture:
    RFC metadata -> Backend (ObjectModelBuilder) -> AbapObject -> Frontend (render) -> artifacts
"""

__version__ = "0.1.0"

from .backend import ObjectModelBuilder, RfcMetadataFetcher, build
from .domain import AbapObject, GenerationRequest, RenderedArtifact
from .errors import (
    AbapApiToolsError,
    ArtifactWriteError,
    ConfigurationError,
    ConfigurationExistsError,
    FetchError,
    RenderError,
)
from .frontend import render
from .orchestrator import Orchestrator

__all__ = [
    "__version__",
    # Backend
    "ObjectModelBuilder",
    "RfcMetadataFetcher",
    "build",
    # Model
    "AbapObject",
    "GenerationRequest",
    "RenderedArtifact",
    # Frontend
    "render",
    "Orchestrator",
    # Errors
    "AbapApiToolsError",
    "ArtifactWriteError",
    "ConfigurationError",
    "ConfigurationExistsError",
    "FetchError",
    "RenderError",
]
