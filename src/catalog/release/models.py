"""Release information records produced by the filename parser."""
from dataclasses import dataclass
from enum import Enum

from catalog.release.source import VideoSource


class ReleaseKind(Enum):
    UNKNOWN = "unknown"
    MOVIE = "movie"
    TV_EPISODE = "tv_episode"


@dataclass(frozen=True)
class Episode:
    """Season/episode numbering of a TV release."""
    season: int
    episode: int
    title: str | None = None

    def __post_init__(self):
        if self.season < 0 or self.episode < 0:
            raise ValueError(f"season and episode must be non-negative, got s{self.season}e{self.episode}")


@dataclass(frozen=True)
class ReleaseInfo:
    """
    Metadata recovered from a scene filename.

    One record covers the three kinds of release. `episode` is set exactly when
    the kind is TV_EPISODE and `year` only for movies. `title` is display text:
    reserved escape tokens have already been resolved.
    """
    kind: ReleaseKind
    title: str
    year: int | None = None
    episode: Episode | None = None
    quality: str | None = None
    source: str | None = None
    codec_description: str | None = None
    scene_group: str | None = None

    def __post_init__(self):
        if (self.kind is ReleaseKind.TV_EPISODE) != (self.episode is not None):
            raise ValueError("episode numbering must be present for TV episodes and only for them")
        if self.year is not None and self.kind is not ReleaseKind.MOVIE:
            raise ValueError("year is only tracked for movies")

    @classmethod
    def unknown(cls, title: str) -> "ReleaseInfo":
        return cls(ReleaseKind.UNKNOWN, title)

    @property
    def is_tv_episode(self) -> bool:
        return self.kind is ReleaseKind.TV_EPISODE

    @property
    def video_source(self) -> VideoSource:
        """The recognized source, or UNKNOWN when `source` is pass-through text (or absent)."""
        return VideoSource.parse(self.source)

    def __str__(self) -> str:
        if self.kind is ReleaseKind.TV_EPISODE:
            text = f"{self.title} - {self.episode.season}x{self.episode.episode:02d}"
            if self.episode.title:
                text += f" - {self.episode.title}"
            return text
        if self.kind is ReleaseKind.MOVIE and self.year is not None:
            return f"{self.title} ({self.year})"
        return self.title
