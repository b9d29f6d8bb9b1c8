"""
Filename helpers shared by the release parser and the sidecar codec.

Covers splitting a scene filename into its informational fields, the title
escape alphabet used for characters that cannot appear in filenames, the
double-delimiter escape of encoded container tokens, and directory listing by
extension.
"""
from pathlib import Path
from typing import List

from catalog.utils.constants import ESCAPED_DELIMITER, TITLE_ESCAPES, TOKEN_DELIMITER


def split_info_fields(filename: str) -> List[str]:
    """
    Divide the information contained in a bare filename into fields.

    Dot separated names ("Show.Name.S01E01.720p") are split on dots when that
    yields more than 3 fields, otherwise the name is split on single spaces.
    Always returns at least one field.
    """
    fields = filename.split(".")
    if len(fields) > 3:
        return fields
    return filename.split(" ")


def unescape_title(title: str) -> str:
    """
    Turn a title read from a scene filename into display text.

    Dots become spaces first, then the reserved ``;x`` tokens are resolved, so
    an escaped dot (``;d``) is not mistaken for a word separator.
    """
    text = title.replace(".", " ")
    for char, token in TITLE_ESCAPES:
        text = text.replace(token, char)
    return text


def escape_title(title: str) -> str:
    """Inverse of unescape_title: "Mission: Impossible" -> "Mission;c.Impossible"."""
    text = title
    for char, token in TITLE_ESCAPES:
        text = text.replace(char, token)
    return text.replace(" ", ".")


def unescape_chars(text: str) -> str:
    """Resolve the reserved ``;x`` tokens without touching dots or spaces."""
    for char, token in TITLE_ESCAPES:
        text = text.replace(token, char)
    return text


def escape_chars(text: str) -> str:
    """Replace reserved title characters with their ``;x`` tokens, leaving dots and spaces alone."""
    for char, token in TITLE_ESCAPES:
        text = text.replace(char, token)
    return text


def decode_token(token: str) -> str:
    """Restore underscores escaped as a double delimiter inside a container token."""
    return token.replace(ESCAPED_DELIMITER, TOKEN_DELIMITER)


def encode_token(value: str) -> str:
    """Escape underscores in a container token as a double delimiter."""
    return value.replace(TOKEN_DELIMITER, ESCAPED_DELIMITER)


def list_files(directory: Path, extensions: set[str]) -> List[Path]:
    """Regular files directly under `directory` whose suffix is in `extensions`, sorted by name."""
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in extensions
    )
