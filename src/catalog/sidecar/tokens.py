"""
Parsing of encoded container names.

An encoded container name packs provenance next to the base name:

    <name>_<sourceWeb>_<uploader>_<originalTitle>_<sourceType>_<ripper>.<ext>

Trailing fields may be left out, so a name has between 1 and 6 tokens. Inside
a token an underscore is written as a double delimiter (``--``).
"""
from dataclasses import dataclass

from catalog.errors import InvalidFilenameStructure
from catalog.utils import SOURCE_WEB_ALIASES, file_util
from catalog.utils.constants import MAX_TOKENS, SAME_AS_NAME, TOKEN_DELIMITER


@dataclass(frozen=True)
class ContainerName:
    """Fields recovered from an encoded container name. Absent fields are None."""
    name: str
    extension: str | None = None
    source_web: str | None = None
    uploader: str | None = None
    original_title: str | None = None
    source_type: str | None = None
    ripper: str | None = None
    token_count: int = 1

    @property
    def filename(self) -> str:
        """The base name plus extension: what the container is renamed to."""
        return f"{self.name}.{self.extension}" if self.extension else self.name

    @property
    def display_title(self) -> str:
        """Original title if one was encoded, else the base name with ';' read as ':'."""
        if self.original_title is not None:
            return self.original_title
        return self.name.replace(";", ":")


def split_extension(filename: str) -> tuple[str, str | None]:
    """'a.b.mkv' -> ('a.b', 'mkv'); a name without dots has no extension."""
    stem, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, None
    return stem, extension


def resolve_source_web(alias: str) -> str:
    """Expand a short source web alias ('tpb') to its domain; other text passes through."""
    return SOURCE_WEB_ALIASES.get(alias, alias)


def parse_container_name(filename: str, semicolon_to_colon: bool = True, strict_escaping: bool = False) -> ContainerName:
    """
    Split an encoded container filename into its positional fields.

    Args:
        filename: Container filename, extension included.
        semicolon_to_colon: Read ';' in the original title as ':'.
        strict_escaping: Also resolve the ``;x`` title escape tokens in the
            original title.

    Raises:
        InvalidFilenameStructure: The base name is empty or has more than 6 tokens.
    """
    stem, extension = split_extension(filename)
    tokens = stem.split(TOKEN_DELIMITER)
    if not tokens[0] or len(tokens) > MAX_TOKENS:
        raise InvalidFilenameStructure(
            f"Invalid container name '{filename}': expected 1 to {MAX_TOKENS} tokens, got {len(tokens)}"
        )

    count = len(tokens)
    fields = {"name": tokens[0], "extension": extension, "token_count": count}
    if count > 1:
        fields["source_web"] = resolve_source_web(file_util.decode_token(tokens[1]))
    if count > 2:
        fields["uploader"] = file_util.decode_token(tokens[2])
    if count > 3:
        original = file_util.decode_token(tokens[3])
        if original == SAME_AS_NAME:
            original = tokens[0]
        if strict_escaping:
            original = file_util.unescape_chars(original)
        if semicolon_to_colon:
            original = original.replace(";", ":")
        fields["original_title"] = original
    if count > 4:
        fields["source_type"] = tokens[4]
    if count > 5:
        fields["ripper"] = tokens[5]
    return ContainerName(**fields)
