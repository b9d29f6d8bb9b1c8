"""
Scene filename parsing.

Package organization:
- source: canonical names for video acquisition sources.
- models: the ReleaseInfo record (unknown, movie or TV episode).
- parser: TV/movie classification and the ordered grammar strategies.

Example:
    from catalog.release import parse_release
    info = parse_release("The.Matrix.1999.BluRay.720p.x264.AC3-GROUP")
    info.title, info.year  # ("The Matrix", 1999)
"""
from .models import Episode, ReleaseInfo, ReleaseKind
from .parser import (
    has_tv_series_pattern,
    parse_release,
    parse_release_file,
)
from .source import VideoSource, canonical_source_name

__all__ = [
    "Episode",
    "ReleaseInfo",
    "ReleaseKind",
    "VideoSource",
    "canonical_source_name",
    "has_tv_series_pattern",
    "parse_release",
    "parse_release_file",
]
