"""
Constants and configuration settings for media cataloguing.

This module contains the fixed vocabularies used while cataloguing media
containers: the supported container extensions, the sidecar and hash manifest
extensions, the source web alias table, the sidecar labels and the status codes
printed for every processed file. Environment overrides are read from the
process environment or from a local ``.env`` file.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# MediaInfo's supported container formats
CONTAINER_EXTENSIONS = {".mkv", ".avi", ".divx", ".mp4", ".ogm", ".wmv"}

# Companion files sharing the container base name
SIDECAR_EXTENSION = ".mnfo"
MANIFEST_EXTENSION = ".md5"

# External media probe
MEDIAINFO_BIN = os.getenv("MEDIAINFO_BIN", "mediainfo")
PROBE_TIMEOUT = float(os.getenv("CATALOG_PROBE_TIMEOUT", "300"))

# Encoded container name layout: <name>_<web>_<uploader>_<original>_<type>_<ripper>
TOKEN_DELIMITER = "_"
ESCAPED_DELIMITER = "--"
SAME_AS_NAME = "="
MAX_TOKENS = 6

SOURCE_WEB_ALIASES = {
    "v": "www.vagos.es",
    "tpb": "thepiratebay.se",
    "phd": "publichd.eu",
}

# Sidecar document layout
SIDECAR_HEADER = "Release"
SIDECAR_NEWLINE = "\r\n"
SIDECAR_LINE_COUNT = 9
LABEL_WIDTH = 41
UNKNOWN_VALUE = "Unknown"

LABEL_SOURCE_WEB = "Source Web"
LABEL_SOURCE_TYPE = "Source Type"
LABEL_RIPPER = "Ripper"
LABEL_UPLOADER = "Uploader"
LABEL_COMPLETE_NAME = "Complete name"
LABEL_ORIGINAL_TITLE = "Original title"
LABEL_UNIQUE_ID = "Unique ID"

MOVIES_ROOT = "/Movies/"
TV_SERIES_ROOT = "/TV Series/"
TV_SERIES_NAME_HINT = " - ["

# Regex patterns for filename parsing
BASIC_EPISODE_REGEX = re.compile(
    r"(?:[sS](?P<season>\d+)[eE](?P<episode>\d+))|(?:(?P<season2>\d+)x(?P<episode2>\d+))"
)

_SOURCES = r"blu-?ray|b[dr]rip|bdremux|hddvd|web-dl|hditunes|hdtv|dvdr(?:ip)?"
_MOVIE_SOURCES = r"blu-?ray|b[dr]rip|bdremux|hddvd|web-dl|hditunes|hdtv(?:rip)?|dvdr(?:ip)?"
_CODEC = r"mkv|avc|h\.?264|x264|xvid|divx|dxva|dts|dts-hd(?:\.ma)?|dd5\.1|ac3|aac|aac2\.0"
_CODECS = rf"(?:(?:{_CODEC})\.)*(?:{_CODEC})"

SCENE_TV_REGEX = re.compile(
    r"^(?P<title>(?:[^.]+\.)*(?:[^.]+))"
    r"\.s(?P<season>\d\d)e(?P<episode>\d\d)\."
    r"(?:(?P<episodetitle>.+?)\.)??"
    r"(?:(?P<quality>720p?|1080p?)\.)?"
    rf"(?:(?P<source>{_SOURCES})\.)?"
    rf"(?P<codecs>{_CODECS})"
    r"-(?P<scenegroup>\w+)$",
    re.IGNORECASE,
)

SCENE_MOVIE_REGEX = re.compile(
    r"^(?P<title>.+?)\."
    r"(?:(?P<year>(?:19|20)\d\d)\.)?"
    r"(?:(?P<extratag>limited|remastered|proper)\.)?"
    rf"(?:(?P<source>{_MOVIE_SOURCES})\.)?"
    r"(?P<quality>720p?|1080p?)\."
    rf"(?:(?P<source2>{_MOVIE_SOURCES})\.)?"
    rf"(?P<codecs>{_CODECS})"
    r"(?:-(?P<scenegroup>\w+)|\.multisubs)$",
    re.IGNORECASE,
)

# Title escape alphabet: filesystem-unsafe character -> reserved token
TITLE_ESCAPES = (
    (":", ";c"),
    (".", ";d"),
    ("*", ";a"),
    ("?", ";q"),
    ("<", ";l"),
    (">", ";g"),
)

# Processing status codes
STATUS_CATALOGED = "CATALOGED"
STATUS_REVERTED = "REVERTED"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
