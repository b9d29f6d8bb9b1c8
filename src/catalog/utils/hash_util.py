"""Hash manifest writer for cataloged containers."""
import hashlib
from pathlib import Path
from typing import Iterable

import catalog

_CHUNK_SIZE = 1024 * 1024


def md5_of(path: Path) -> str:
    digest = hashlib.md5()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_manifest(manifest: Path, files: Iterable[Path]) -> Path:
    """
    Write an md5sum-style manifest for `files` to `manifest`.

    Each file is listed by its bare name (``<hex> *<name>``), so the manifest is
    only meaningful next to the files it describes.
    """
    lines = [f"; Generated by cataloguer {catalog.__version__}"]
    for path in files:
        lines.append(f"{md5_of(path)} *{path.name}")
    manifest.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return manifest
