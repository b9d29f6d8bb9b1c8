"""
Canonical video source names.

Scene releases spell the same acquisition source many ways ("bluray",
"blu-ray", "BluRay"...). VideoSource maps those aliases to one display label.
Anything that is not recognized parses to ``VideoSource.UNKNOWN`` and callers
keep the original text.
"""
from enum import Enum


class VideoSource(Enum):
    """Video acquisition sources, valued by their display label."""
    BLU_RAY = "Blu-ray"
    BD_RIP = "BDRip"
    BR_RIP = "BRRip"
    BD_REMUX = "BDRemux"
    HD_DVD = "HD DVD"
    WEB_DL = "WEB-DL"
    HD_ITUNES = "HDiTunes"
    HDTV = "HDTV"
    HDTV_RIP = "HDTVRip"
    DVDR = "DVDR"
    DVD_RIP = "DVDRip"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str | None) -> "VideoSource":
        """Look up a source alias case-insensitively; unrecognized text gives UNKNOWN."""
        if not name:
            return cls.UNKNOWN
        return _ALIASES.get(name.strip().lower(), cls.UNKNOWN)


_ALIASES = {
    "bluray": VideoSource.BLU_RAY,
    "blu-ray": VideoSource.BLU_RAY,
    "bdrip": VideoSource.BD_RIP,
    "brrip": VideoSource.BR_RIP,
    "bdremux": VideoSource.BD_REMUX,
    "hddvd": VideoSource.HD_DVD,
    "hd-dvd": VideoSource.HD_DVD,
    "web-dl": VideoSource.WEB_DL,
    "webdl": VideoSource.WEB_DL,
    "hditunes": VideoSource.HD_ITUNES,
    "hdtv": VideoSource.HDTV,
    "hdtvrip": VideoSource.HDTV_RIP,
    "dvdr": VideoSource.DVDR,
    "dvdrip": VideoSource.DVD_RIP,
}


def canonical_source_name(name: str) -> str:
    """Return the display label for a known alias, or `name` unchanged."""
    source = VideoSource.parse(name)
    return name if source is VideoSource.UNKNOWN else str(source)
