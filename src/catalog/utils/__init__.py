"""
Constants, logging and file/system helpers for media cataloguing.

This package holds the fixed vocabularies of the encoded filename and sidecar
formats, the structured logger, filename escaping helpers, the external probe
wrapper and the hash manifest writer.
"""

from .constants import (
    BASIC_EPISODE_REGEX,
    CONTAINER_EXTENSIONS,
    MANIFEST_EXTENSION,
    MEDIAINFO_BIN,
    PROBE_TIMEOUT,
    SCENE_MOVIE_REGEX,
    SCENE_TV_REGEX,
    SIDECAR_EXTENSION,
    SOURCE_WEB_ALIASES,
    STATUS_CATALOGED,
    STATUS_FAIL,
    STATUS_REVERTED,
    STATUS_SKIP,
)
from .logger import LogLevel

__all__ = [
    "BASIC_EPISODE_REGEX",
    "CONTAINER_EXTENSIONS",
    "MANIFEST_EXTENSION",
    "MEDIAINFO_BIN",
    "PROBE_TIMEOUT",
    "SCENE_MOVIE_REGEX",
    "SCENE_TV_REGEX",
    "SIDECAR_EXTENSION",
    "SOURCE_WEB_ALIASES",
    "STATUS_CATALOGED",
    "STATUS_FAIL",
    "STATUS_REVERTED",
    "STATUS_SKIP",
    "LogLevel",
]
