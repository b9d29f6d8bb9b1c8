"""
Sidecar documents and the cataloguing workflow.

Package organization:
- tokens: parsing of encoded container names into provenance fields.
- codec: building sidecar documents from probe reports and reading them back.
- batch: the Cataloguer, which catalogs or reverts a whole directory.
"""
from .batch import BatchSummary, Cataloguer, FileResult, catalog_directory
from .codec import SidecarFields, decode_sidecar, encode_sidecar, rebuild_container_name
from .tokens import ContainerName, parse_container_name

__all__ = [
    "BatchSummary",
    "Cataloguer",
    "ContainerName",
    "FileResult",
    "SidecarFields",
    "catalog_directory",
    "decode_sidecar",
    "encode_sidecar",
    "parse_container_name",
    "rebuild_container_name",
]
