# python
"""Batch cataloguing of a media directory.

The Cataloguer walks the containers of one directory in name order. In forward
mode each container that has no sidecar yet is probed, its sidecar is written
and it is renamed to its bare base name (plus an optional hash manifest). In
reverse mode each cataloged container gets its encoded name back and its
sidecar and manifest are deleted.

Files are processed one at a time. A failing file is reported and the batch
moves on; only a missing probe executable and, by default, a failed rename
stop the whole run.
"""
import locale
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, List

from tqdm import tqdm

from catalog import release
from catalog.config import CatalogConfig
from catalog.errors import (
    ArtifactDeletionFailure,
    CatalogError,
    InvalidFilenameStructure,
    RenameFailure,
    SidecarMalformed,
)
from catalog.sidecar import codec, tokens
from catalog.utils import (
    CONTAINER_EXTENSIONS,
    LogLevel,
    MANIFEST_EXTENSION,
    SIDECAR_EXTENSION,
    STATUS_CATALOGED,
    STATUS_FAIL,
    STATUS_REVERTED,
    STATUS_SKIP,
)
from catalog.utils import file_util, hash_util, logger, system_util

ProbeFn = Callable[[Path], List[str]]
ManifestFn = Callable[[Path, Iterable[Path]], object]


@dataclass
class FileResult:
    source: Path
    target: Path | None
    status: str
    message: str | None = None


@dataclass
class BatchSummary:
    results: List[FileResult] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def failed(self) -> bool:
        return self.count(STATUS_FAIL) > 0


class Cataloguer:
    """
    Catalogs (or reverts) the media containers of one directory.

    Args:
        config: Run options.
        probe: Returns the probe report lines for a container. Defaults to
            running MediaInfo with the configured binary and timeout.
        write_manifest: Writes a hash manifest for a list of files. Defaults
            to an MD5 manifest.
    """

    def __init__(self, config: CatalogConfig, probe: ProbeFn | None = None, write_manifest: ManifestFn | None = None):
        self.config = config
        self._uses_mediainfo = probe is None
        self._probe = probe or partial(
            system_util.probe_media, binary=config.mediainfo_binary, timeout=config.probe_timeout
        )
        self._write_manifest = write_manifest or hash_util.write_manifest

    def start(self) -> BatchSummary:
        """
        Process every supported container in the directory.

        Raises:
            ExternalToolUnavailable: forward mode and the probe binary is not on PATH.
            RenameFailure: a rename failed and `stop_on_rename_failure` is set.
        """
        if self._uses_mediainfo and not self.config.reverse:
            found = system_util.require_binary(self.config.mediainfo_binary)
            logger.log("startup.probe", LogLevel.DEBUG, msg="MediaInfo found", path=found)

        directory = self.config.directory
        media_files = file_util.list_files(directory, CONTAINER_EXTENSIONS)
        cataloged = {p.stem for p in file_util.list_files(directory, {SIDECAR_EXTENSION})}
        for f in media_files:
            logger.log("listing.media", LogLevel.DEBUG, name=f.name)
        for stem in sorted(cataloged):
            logger.log("listing.sidecar", LogLevel.DEBUG, name=stem + SIDECAR_EXTENSION)

        logger.log(
            "catalog.start",
            LogLevel.INFO,
            directory=str(directory),
            files_found=len(media_files),
            cataloged=len(cataloged),
            reverse=self.config.reverse,
            info_only=self.config.info_only,
        )

        summary = BatchSummary()
        desc = "Reverting files" if self.config.reverse else "Cataloging files"
        for file in tqdm(media_files, desc=desc):
            is_cataloged = file.stem in cataloged
            if self.config.reverse:
                if is_cataloged:
                    result = self._run(self.revert_file, file, STATUS_REVERTED)
                else:
                    result = FileResult(file, None, STATUS_SKIP, "not cataloged")
            elif is_cataloged:
                result = FileResult(file, None, STATUS_SKIP, "already cataloged")
            else:
                result = self._run(self.catalog_file, file, STATUS_CATALOGED)
            summary.results.append(result)
            logger.log(
                "catalog.file",
                LogLevel.ERROR if result.status == STATUS_FAIL else LogLevel.INFO,
                status=result.status,
                file=file.name,
                target=result.target.name if result.target else None,
                msg=result.message,
            )

        logger.log(
            "catalog.complete",
            LogLevel.INFO,
            total=len(summary.results),
            cataloged=summary.count(STATUS_CATALOGED),
            reverted=summary.count(STATUS_REVERTED),
            skipped=summary.count(STATUS_SKIP),
            failed=summary.count(STATUS_FAIL),
        )
        return summary

    def _run(self, action: Callable[[Path], Path], file: Path, ok_status: str) -> FileResult:
        try:
            target = action(file)
        except RenameFailure as e:
            if self.config.stop_on_rename_failure:
                logger.log("catalog.abort", LogLevel.ERROR, msg=str(e), file=file.name)
                raise
            return FileResult(file, None, STATUS_FAIL, str(e))
        except (CatalogError, OSError, ValueError) as e:
            return FileResult(file, None, STATUS_FAIL, str(e))
        return FileResult(file, target, ok_status)

    def catalog_file(self, file: Path) -> Path:
        """
        Write the sidecar for `file`, rename it to its base name and hash both.

        Returns the renamed container path. The sidecar is written only once
        the whole document is assembled, and removed again if the rename fails.
        """
        container = tokens.parse_container_name(
            file.name,
            semicolon_to_colon=self.config.semicolon_to_colon,
            strict_escaping=self.config.strict_escaping,
        )
        info = release.parse_release(container.name)
        logger.log(
            "catalog.parse",
            LogLevel.DEBUG,
            file=file.name,
            kind=info.kind.value,
            title=info.title,
            tokens=container.token_count,
        )

        sidecar = file.with_name(container.name + SIDECAR_EXTENSION)
        if sidecar.exists():
            raise CatalogError(f"{sidecar.name} already exists", file)

        report = self._probe(file)
        document = codec.encode_sidecar(info, container, report)
        logger.log("catalog.sidecar", LogLevel.TRACE, file=file.name, document=document)
        sidecar.write_text(document, encoding="utf-8", newline="")

        target = file.with_name(container.filename)
        try:
            self._rename(file, target)
        except RenameFailure:
            sidecar.unlink(missing_ok=True)
            raise

        if not self.config.info_only:
            manifest = file.with_name(container.name + MANIFEST_EXTENSION)
            self._write_manifest(manifest, [target, sidecar])
            logger.log("catalog.manifest", LogLevel.DEBUG, path=manifest.name)
        return target

    def revert_file(self, file: Path) -> Path:
        """
        Give a cataloged container its encoded name back and delete its sidecar and manifest.

        Returns the renamed container path.
        """
        sidecar = file.with_name(file.stem + SIDECAR_EXTENSION)
        try:
            text = self._read_sidecar(sidecar)
        except FileNotFoundError as e:
            raise SidecarMalformed(f"Media info file not found: {sidecar}", sidecar, "document") from e
        except OSError as e:
            raise SidecarMalformed(f"Error when reading media info file {sidecar}: {e}", sidecar, "document") from e

        try:
            fields = codec.decode_sidecar(text)
        except SidecarMalformed as e:
            raise SidecarMalformed(f"{e} in {sidecar}", sidecar, e.field) from e

        extension = file.suffix[1:] or None
        new_name = codec.rebuild_container_name(
            file.stem, fields, extension, strict_escaping=self.config.strict_escaping
        )
        logger.log("reverse.rebuild", LogLevel.INFO, file=file.name, name=new_name)
        try:
            target = file.with_name(new_name)
        except ValueError as e:
            raise InvalidFilenameStructure(f"Rebuilt name '{new_name}' is not a valid filename", file) from e
        self._rename(file, target)

        manifest = file.with_name(file.stem + MANIFEST_EXTENSION)
        if manifest.exists():
            self._delete(manifest)
        else:
            logger.log("reverse.manifest", LogLevel.INFO, msg="MD5 hash file not found", path=manifest.name)
        self._delete(sidecar)
        return target

    @staticmethod
    def _read_sidecar(sidecar: Path) -> str:
        """Read a sidecar as UTF-8, falling back to the platform default encoding."""
        data = sidecar.read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            pass
        encoding = locale.getpreferredencoding(False)
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise SidecarMalformed(
                f"Media info file {sidecar} is neither UTF-8 nor {encoding}: {e}", sidecar, "document"
            ) from e

    @staticmethod
    def _rename(source: Path, target: Path) -> None:
        if source == target:
            return
        if target.exists():
            raise RenameFailure(f'"{source.name}" could not be renamed to "{target.name}": target exists', source)
        try:
            source.rename(target)
        except OSError as e:
            raise RenameFailure(f'"{source.name}" could not be renamed to "{target.name}": {e}', source) from e
        logger.log("catalog.rename", LogLevel.DEBUG, source=source.name, target=target.name)

    @staticmethod
    def _delete(path: Path) -> None:
        try:
            path.unlink()
        except OSError as e:
            raise ArtifactDeletionFailure(f"{path} could not be deleted: {e}", path) from e
        logger.log("reverse.delete", LogLevel.DEBUG, path=path.name)


def catalog_directory(config: CatalogConfig) -> BatchSummary:
    """Run a Cataloguer over `config.directory` with the real probe and manifest writer."""
    return Cataloguer(config).start()
