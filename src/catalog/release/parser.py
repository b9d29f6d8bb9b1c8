"""
Module for classifying and parsing scene filenames into ReleaseInfo records.

A filename is first classified as TV or movie by scanning its informational
fields for a season/episode marker. Each branch then tries an ordered list of
grammar strategies; the first one that matches produces the record. When none
matches, the name degrades to an UNKNOWN release holding the raw filename, so
parsing never fails.
"""
from pathlib import Path
from typing import Callable, List, Optional

from catalog.release.models import Episode, ReleaseInfo, ReleaseKind
from catalog.release.source import canonical_source_name
from catalog.utils import BASIC_EPISODE_REGEX, LogLevel, SCENE_MOVIE_REGEX, SCENE_TV_REGEX
from catalog.utils import file_util, logger

Strategy = Callable[[str], Optional[ReleaseInfo]]


def has_tv_series_pattern(filename: str) -> bool:
    """True when any informational field of `filename` is exactly a season/episode marker."""
    for field in file_util.split_info_fields(filename):
        if BASIC_EPISODE_REGEX.fullmatch(field):
            return True
    return False


def _optional(value: str | None) -> str | None:
    return value or None


def _source(value: str | None) -> str | None:
    return canonical_source_name(value) if value else None


def match_scene_tv(filename: str) -> ReleaseInfo | None:
    """Title.S01E02[.Episode.Title][.720p][.HDTV].x264-GROUP"""
    m = SCENE_TV_REGEX.match(filename)
    if not m:
        return None
    episode_title = m.group("episodetitle")
    if not episode_title:
        logger.log("parse.tv", LogLevel.DEBUG, msg="Episode title field not present", filename=filename)
    episode = Episode(
        season=int(m.group("season")),
        episode=int(m.group("episode")),
        title=file_util.unescape_title(episode_title) if episode_title else None,
    )
    return ReleaseInfo(
        ReleaseKind.TV_EPISODE,
        file_util.unescape_title(m.group("title")),
        episode=episode,
        quality=_optional(m.group("quality")),
        source=_source(m.group("source")),
        codec_description=_optional(m.group("codecs")),
        scene_group=_optional(m.group("scenegroup")),
    )


def match_basic_episode(filename: str) -> ReleaseInfo | None:
    """
    Guess a TV episode from the first season/episode marker found anywhere.

    Everything in front of the marker is taken as the title; nothing else is
    extracted.
    """
    m = BASIC_EPISODE_REGEX.search(filename)
    if not m:
        return None
    if m.group("season") is not None:
        season, episode = m.group("season"), m.group("episode")
    else:
        season, episode = m.group("season2"), m.group("episode2")
    title = file_util.unescape_title(filename[: m.start()])
    return ReleaseInfo(ReleaseKind.TV_EPISODE, title, episode=Episode(int(season), int(episode)))


def match_scene_movie(filename: str) -> ReleaseInfo | None:
    """Title[.1999][.PROPER][.BluRay].720p[.BluRay].x264.AC3-GROUP (or ending in .multisubs)"""
    m = SCENE_MOVIE_REGEX.match(filename)
    if not m:
        return None
    year = m.group("year")
    if year is None:
        logger.log("parse.movie", LogLevel.DEBUG, msg="No year info", filename=filename)
    # The source in front of the quality wins over the one after it
    source = m.group("source") or m.group("source2")
    return ReleaseInfo(
        ReleaseKind.MOVIE,
        file_util.unescape_title(m.group("title")),
        year=int(year) if year else None,
        quality=_optional(m.group("quality")),
        source=_source(source),
        codec_description=_optional(m.group("codecs")),
        scene_group=_optional(m.group("scenegroup")),
    )


TV_STRATEGIES: List[Strategy] = [match_scene_tv, match_basic_episode]
MOVIE_STRATEGIES: List[Strategy] = [match_scene_movie]


def apply_strategies(filename: str, strategies: List[Strategy]) -> ReleaseInfo | None:
    """Return the result of the first strategy that recognizes `filename`."""
    for strategy in strategies:
        info = strategy(filename)
        if info is not None:
            return info
    return None


def parse_release(filename: str) -> ReleaseInfo:
    """
    Parse a bare filename (no extension) into a ReleaseInfo.

    Examples:
      "The.Matrix.1999.BluRay.720p.x264.AC3-GROUP" -> MOVIE "The Matrix" (1999)
      "Show.Name.S02E05.Episode.Title.1080p.WEB-DL.x264-GROUP" -> TV_EPISODE "Show Name" 2x05
      "Home Video" -> UNKNOWN "Home Video"
    """
    is_tv = has_tv_series_pattern(filename)
    logger.log("parse.start", LogLevel.DEBUG, filename=filename, kind="tv" if is_tv else "movie")
    strategies = TV_STRATEGIES if is_tv else MOVIE_STRATEGIES
    info = apply_strategies(filename, strategies)
    if info is None:
        logger.log("parse.fallback", LogLevel.DEBUG, msg="No pattern matched", filename=filename)
        info = ReleaseInfo.unknown(filename)
    return info


def parse_release_file(path: Path) -> ReleaseInfo:
    """Parse the name of `path` without its extension."""
    return parse_release(path.stem)
