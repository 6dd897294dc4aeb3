"""Backend: RFC metadata fetch and AbapObject building."""

from .builder import ObjectModelBuilder, assemble, build, sort_fields_by_name
from .fetcher import MetadataFetcher, RawMetadata, RfcMetadataFetcher, open_connection

__all__ = [
    "MetadataFetcher",
    "ObjectModelBuilder",
    "RawMetadata",
    "RfcMetadataFetcher",
    "assemble",
    "build",
    "open_connection",
    "sort_fields_by_name",
]
