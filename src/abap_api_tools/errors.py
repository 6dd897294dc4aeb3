"""Exception hierarchy for abap_api_tools."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed worklist entry."""

    FETCH = "fetch"
    RENDER = "render"
    FILESYSTEM = "filesystem"
    INTERNAL = "internal"  # unexpected exception, logged with traceback


class AbapApiToolsError(Exception):
    """Base class for all errors raised by abap_api_tools."""

    pass


class ConfigurationError(AbapApiToolsError):
    """Raised for invalid run configuration. Fatal for the whole run."""

    pass


class ConfigurationExistsError(ConfigurationError):
    """Raised when a local UI configuration would be overwritten."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Remove local configuration first: {path}")


class FetchError(AbapApiToolsError):
    """Raised when metadata cannot be read from the ABAP system."""

    kind = ErrorKind.FETCH


class RenderError(AbapApiToolsError):
    """Raised when an artifact cannot be rendered."""

    kind = ErrorKind.RENDER


class ArtifactWriteError(AbapApiToolsError):
    """Raised when a rendered artifact cannot be written."""

    kind = ErrorKind.FILESYSTEM


__all__ = [
    "AbapApiToolsError",
    "ArtifactWriteError",
    "ConfigurationError",
    "ConfigurationExistsError",
    "ErrorKind",
    "FetchError",
    "RenderError",
]
