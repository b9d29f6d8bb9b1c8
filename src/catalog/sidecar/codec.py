"""
Sidecar document encoding and decoding.

The sidecar (``<name>.mnfo``) starts with a release block followed by the
media probe report::

    0  Release
    1  Source Web      : thepiratebay.se
    2  Source Type     : bluray
    3  Ripper          : GROUP
    4  Uploader        : Nestai
    5
    6  General
    7  Complete name   : /Movies/Inception.mkv
    8  Original title  : Origen
       ... rest of the report ...

Labels are padded to a fixed column. Decoding addresses lines by index, so
the first nine lines must keep this shape for a container to be reverted.
"""
from dataclasses import dataclass
from typing import Iterable, List

from catalog.errors import SidecarMalformed
from catalog.release import ReleaseInfo
from catalog.sidecar.tokens import ContainerName
from catalog.utils import file_util
from catalog.utils.constants import (
    LABEL_COMPLETE_NAME,
    LABEL_ORIGINAL_TITLE,
    LABEL_RIPPER,
    LABEL_SOURCE_TYPE,
    LABEL_SOURCE_WEB,
    LABEL_UNIQUE_ID,
    LABEL_UPLOADER,
    LABEL_WIDTH,
    MOVIES_ROOT,
    SIDECAR_HEADER,
    SIDECAR_LINE_COUNT,
    SIDECAR_NEWLINE,
    TOKEN_DELIMITER,
    TV_SERIES_NAME_HINT,
    TV_SERIES_ROOT,
    UNKNOWN_VALUE,
)


@dataclass(frozen=True)
class SidecarFields:
    """Provenance read back from a sidecar document."""
    source_web: str
    source_type: str
    ripper: str
    uploader: str
    original_title: str


def format_line(label: str, value: str) -> str:
    """'Ripper', 'GROUP' -> 'Ripper<padding>: GROUP'"""
    return f"{label:<{LABEL_WIDTH}}: {value}"


def destination_path(info: ReleaseInfo, container: ContainerName) -> str:
    """Library path shown as the Complete name: /TV Series/<file> or /Movies/<file>."""
    is_tv = info.is_tv_episode or TV_SERIES_NAME_HINT in container.name
    root = TV_SERIES_ROOT if is_tv else MOVIES_ROOT
    return root + container.filename


def encode_sidecar(info: ReleaseInfo, container: ContainerName, report: Iterable[str]) -> str:
    """
    Build the sidecar text for a container from its probe report.

    The report's Unique ID line is dropped and its Complete name line is
    replaced by the destination path plus an Original title line. Every other
    report line is copied verbatim. Lines are CRLF separated with no trailing
    terminator.
    """
    lines: List[str] = [
        SIDECAR_HEADER,
        format_line(LABEL_SOURCE_WEB, container.source_web or UNKNOWN_VALUE),
        format_line(LABEL_SOURCE_TYPE, container.source_type or UNKNOWN_VALUE),
        format_line(LABEL_RIPPER, container.ripper or UNKNOWN_VALUE),
        format_line(LABEL_UPLOADER, container.uploader or UNKNOWN_VALUE),
        "",
    ]
    for line in report:
        if line.startswith(LABEL_UNIQUE_ID):
            continue
        if line.startswith(LABEL_COMPLETE_NAME):
            lines.append(format_line(LABEL_COMPLETE_NAME, destination_path(info, container)))
            lines.append(format_line(LABEL_ORIGINAL_TITLE, container.display_title))
        else:
            lines.append(line)
    return SIDECAR_NEWLINE.join(lines)


def _read_value(lines: List[str], index: int, label: str) -> str:
    line = lines[index]
    if not line.startswith(label):
        raise SidecarMalformed(f"Invalid {label.lower()} line at index {index}", field=label)
    colon = line.find(":", len(label))
    if colon < 0:
        raise SidecarMalformed(f"Invalid {label.lower()} line at index {index}: missing ':'", field=label)
    return line[colon + 2:]


def decode_sidecar(text: str) -> SidecarFields:
    """
    Read the provenance back out of a sidecar document.

    Raises:
        SidecarMalformed: fewer than nine lines, or a label missing at its index.
            The exception's `field` names the offending label.
    """
    lines = text.splitlines()
    if len(lines) < SIDECAR_LINE_COUNT:
        raise SidecarMalformed(
            f"Invalid media info document: expected {SIDECAR_LINE_COUNT} lines, got {len(lines)}",
            field="document",
        )
    return SidecarFields(
        source_web=_read_value(lines, 1, LABEL_SOURCE_WEB),
        source_type=_read_value(lines, 2, LABEL_SOURCE_TYPE),
        ripper=_read_value(lines, 3, LABEL_RIPPER),
        uploader=_read_value(lines, 4, LABEL_UPLOADER),
        original_title=_read_value(lines, 8, LABEL_ORIGINAL_TITLE),
    )


def rebuild_container_name(name: str, fields: SidecarFields, extension: str | None, strict_escaping: bool = False) -> str:
    """
    Rebuild the encoded container filename from a base name and decoded provenance.

    Only ':' is turned back into ';' in the original title unless
    `strict_escaping` is set, in which case all reserved title characters and
    underscores are escaped too. Source web domains are not shortened back to
    their alias.
    """
    original = fields.original_title
    if strict_escaping:
        original = file_util.encode_token(file_util.escape_chars(original))
    else:
        original = original.replace(":", ";")
    tokens = [name, fields.source_web, fields.uploader, original, fields.source_type, fields.ripper]
    rebuilt = TOKEN_DELIMITER.join(tokens)
    return f"{rebuilt}.{extension}" if extension else rebuilt
