"""Run options for a cataloguing batch."""
from dataclasses import dataclass
from pathlib import Path

from catalog.utils.constants import MEDIAINFO_BIN, PROBE_TIMEOUT


@dataclass(frozen=True)
class CatalogConfig:
    """
    Options for one run over a media directory.

    Attributes:
        directory: Folder holding the containers to catalog or revert.
        info_only: Write the sidecar but skip the hash manifest.
        reverse: Rebuild encoded names from sidecars and delete the sidecars.
        semicolon_to_colon: Read ';' in original-title tokens as ':'.
        strict_escaping: Escape/unescape every reserved title character in
            original-title tokens, not just ':'.
        stop_on_rename_failure: Abort the batch when a container can't be renamed.
        mediainfo_binary: Probe executable name or path.
        probe_timeout: Seconds to wait for one probe run (None waits forever).
    """
    directory: Path
    info_only: bool = False
    reverse: bool = False
    semicolon_to_colon: bool = True
    strict_escaping: bool = False
    stop_on_rename_failure: bool = True
    mediainfo_binary: str = MEDIAINFO_BIN
    probe_timeout: float | None = PROBE_TIMEOUT

    def __post_init__(self):
        if self.info_only and self.reverse:
            raise ValueError("Media info only and reverse mode can't be used together.")
        if not self.directory.exists():
            raise ValueError(f"{self.directory} doesn't exist!")
        if not self.directory.is_dir():
            raise ValueError(f"{self.directory} is not a directory!")
        if self.probe_timeout is not None and self.probe_timeout <= 0:
            raise ValueError("probe timeout must be positive")
