import locale
from pathlib import Path

import pytest

from catalog.config import CatalogConfig
from catalog.errors import ExternalToolUnavailable, ProbeInvocationFailure, RenameFailure
from catalog.sidecar import Cataloguer
from catalog.sidecar.codec import format_line
from catalog.utils import STATUS_CATALOGED, STATUS_FAIL, STATUS_REVERTED, STATUS_SKIP

ENCODED = "Inception_tpb_Nestai_Origen_bluray_GROUP.mkv"


class FakeProbe:
    def __init__(self, report, fail_on=()):
        self.report = report
        self.fail_on = set(fail_on)
        self.calls = []

    def __call__(self, path):
        self.calls.append(path.name)
        if path.name in self.fail_on:
            raise ProbeInvocationFailure("mediainfo exited with code 1", path)
        return list(self.report)


class FakeManifest:
    def __init__(self):
        self.calls = []

    def __call__(self, manifest, files):
        files = list(files)
        self.calls.append((manifest, files))
        manifest.write_text("\n".join(f.name for f in files))
        return manifest


@pytest.fixture
def probe(report):
    return FakeProbe(report)


@pytest.fixture
def manifest():
    return FakeManifest()


def _run(directory, probe, manifest, **options):
    return Cataloguer(CatalogConfig(directory, **options), probe=probe, write_manifest=manifest).start()


def test_catalog_writes_sidecar_renames_and_hashes(tmp_path, probe, manifest):
    (tmp_path / ENCODED).write_bytes(b"video")

    summary = _run(tmp_path, probe, manifest)

    [result] = summary.results
    assert result.status == STATUS_CATALOGED
    assert result.target == tmp_path / "Inception.mkv"
    assert (tmp_path / "Inception.mkv").read_bytes() == b"video"
    assert not (tmp_path / ENCODED).exists()

    sidecar = (tmp_path / "Inception.mnfo").read_bytes().decode("utf-8")
    assert sidecar.startswith("Release\r\nSource Web")
    assert "/Movies/Inception.mkv" in sidecar
    assert manifest.calls == [(tmp_path / "Inception.md5", [tmp_path / "Inception.mkv", tmp_path / "Inception.mnfo"])]
    assert probe.calls == [ENCODED]
    assert not summary.failed


def test_info_only_skips_manifest(tmp_path, probe, manifest):
    (tmp_path / ENCODED).write_bytes(b"video")

    _run(tmp_path, probe, manifest, info_only=True)

    assert manifest.calls == []
    assert (tmp_path / "Inception.mnfo").exists()
    assert not (tmp_path / "Inception.md5").exists()


def test_already_cataloged_files_are_skipped(tmp_path, probe, manifest):
    (tmp_path / "Heat.mkv").write_bytes(b"video")
    (tmp_path / "Heat.mnfo").write_text("Release")

    summary = _run(tmp_path, probe, manifest)

    assert [r.status for r in summary.results] == [STATUS_SKIP]
    assert probe.calls == []


def test_other_files_are_ignored(tmp_path, probe, manifest):
    (tmp_path / "notes.txt").write_text("hello")

    summary = _run(tmp_path, probe, manifest)

    assert summary.results == []


def test_too_many_tokens_fails_before_probing(tmp_path, probe, manifest):
    (tmp_path / "a_b_c_d_e_f_g.mkv").write_bytes(b"video")

    summary = _run(tmp_path, probe, manifest)

    assert [r.status for r in summary.results] == [STATUS_FAIL]
    assert probe.calls == []
    assert (tmp_path / "a_b_c_d_e_f_g.mkv").exists()
    assert summary.failed


def test_probe_failure_aborts_only_that_file(tmp_path, report, manifest):
    (tmp_path / "Alpha_tpb.mkv").write_bytes(b"a")
    (tmp_path / "Beta_tpb.mkv").write_bytes(b"b")
    probe = FakeProbe(report, fail_on={"Alpha_tpb.mkv"})

    summary = _run(tmp_path, probe, manifest)

    assert [r.status for r in summary.results] == [STATUS_FAIL, STATUS_CATALOGED]
    assert (tmp_path / "Alpha_tpb.mkv").exists()
    assert not (tmp_path / "Alpha.mnfo").exists()
    assert (tmp_path / "Beta.mkv").exists()


def test_rename_failure_stops_batch_and_removes_sidecar(tmp_path, probe, manifest):
    (tmp_path / "Heat_tpb.mkv").write_bytes(b"video")
    (tmp_path / "Heat.mkv").mkdir()

    with pytest.raises(RenameFailure):
        _run(tmp_path, probe, manifest)

    assert (tmp_path / "Heat_tpb.mkv").exists()
    assert not (tmp_path / "Heat.mnfo").exists()


def test_rename_failure_can_be_skipped(tmp_path, probe, manifest):
    (tmp_path / "Heat_tpb.mkv").write_bytes(b"video")
    (tmp_path / "Heat.mkv").mkdir()
    (tmp_path / "Ran_tpb.mkv").write_bytes(b"video")

    summary = _run(tmp_path, probe, manifest, stop_on_rename_failure=False)

    assert [r.status for r in summary.results] == [STATUS_FAIL, STATUS_CATALOGED]
    assert not (tmp_path / "Heat.mnfo").exists()


def test_reverse_restores_encoded_name_and_deletes_artifacts(tmp_path, probe, manifest):
    (tmp_path / ENCODED).write_bytes(b"video")
    _run(tmp_path, probe, manifest)

    summary = _run(tmp_path, probe, manifest, reverse=True)

    [result] = summary.results
    assert result.status == STATUS_REVERTED
    restored = tmp_path / "Inception_thepiratebay.se_Nestai_Origen_bluray_GROUP.mkv"
    assert result.target == restored
    assert restored.read_bytes() == b"video"
    assert not (tmp_path / "Inception.mnfo").exists()
    assert not (tmp_path / "Inception.md5").exists()


def test_reverse_without_manifest(tmp_path, probe, manifest):
    (tmp_path / ENCODED).write_bytes(b"video")
    _run(tmp_path, probe, manifest, info_only=True)

    summary = _run(tmp_path, probe, manifest, reverse=True)

    assert [r.status for r in summary.results] == [STATUS_REVERTED]


def test_reverse_skips_uncataloged_files(tmp_path, probe, manifest):
    (tmp_path / ENCODED).write_bytes(b"video")

    summary = _run(tmp_path, probe, manifest, reverse=True)

    assert [r.status for r in summary.results] == [STATUS_SKIP]
    assert (tmp_path / ENCODED).exists()


def test_reverse_with_malformed_sidecar_keeps_file(tmp_path, probe, manifest):
    (tmp_path / "Heat.mkv").write_bytes(b"video")
    (tmp_path / "Heat.mnfo").write_text("Release\r\nnot a sidecar")

    summary = _run(tmp_path, probe, manifest, reverse=True)

    [result] = summary.results
    assert result.status == STATUS_FAIL
    assert (tmp_path / "Heat.mkv").exists()
    assert (tmp_path / "Heat.mnfo").exists()


def test_missing_probe_binary_aborts_run(tmp_path):
    (tmp_path / ENCODED).write_bytes(b"video")
    config = CatalogConfig(tmp_path, mediainfo_binary="no-such-mediainfo-binary-here")

    with pytest.raises(ExternalToolUnavailable):
        Cataloguer(config).start()

    assert (tmp_path / ENCODED).exists()


def test_config_rejects_conflicting_modes(tmp_path):
    with pytest.raises(ValueError):
        CatalogConfig(tmp_path, info_only=True, reverse=True)


def test_config_rejects_missing_directory(tmp_path):
    with pytest.raises(ValueError):
        CatalogConfig(tmp_path / "missing")


def _legacy_sidecar(original_title):
    return "\r\n".join(
        [
            "Release",
            format_line("Source Web", "www.vagos.es"),
            format_line("Source Type", "dvdrip"),
            format_line("Ripper", "RIP"),
            format_line("Uploader", "Straw"),
            "",
            "General",
            format_line("Complete name", "/Movies/Amelie.avi"),
            format_line("Original title", original_title),
        ]
    )


def test_reverse_reads_platform_encoded_sidecar(tmp_path, probe, manifest, monkeypatch):
    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "cp1252")
    (tmp_path / "Amelie.avi").write_bytes(b"video")
    (tmp_path / "Amelie.mnfo").write_bytes(_legacy_sidecar("Amélie").encode("cp1252"))

    summary = _run(tmp_path, probe, manifest, reverse=True)

    assert [r.status for r in summary.results] == [STATUS_REVERTED]
    assert (tmp_path / "Amelie_www.vagos.es_Straw_Amélie_dvdrip_RIP.avi").exists()


def test_undecodable_sidecar_fails_only_that_file(tmp_path, probe, manifest, monkeypatch):
    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "utf-8")
    (tmp_path / "Amelie.avi").write_bytes(b"video")
    (tmp_path / "Amelie.mnfo").write_bytes(_legacy_sidecar("Amélie").encode("cp1252"))
    (tmp_path / "Heat.avi").write_bytes(b"video")
    (tmp_path / "Heat.mnfo").write_text(_legacy_sidecar("Heat"), encoding="utf-8")

    summary = _run(tmp_path, probe, manifest, reverse=True)

    assert [r.status for r in summary.results] == [STATUS_FAIL, STATUS_REVERTED]
    assert (tmp_path / "Amelie.avi").exists()
    assert (tmp_path / "Amelie.mnfo").exists()


def test_unexpected_value_error_fails_only_that_file(tmp_path, report, manifest):
    class BadProbe(FakeProbe):
        def __call__(self, path):
            super().__call__(path)
            if path.name == "Alpha_tpb.mkv":
                raise UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte")
            return list(self.report)

    (tmp_path / "Alpha_tpb.mkv").write_bytes(b"a")
    (tmp_path / "Beta_tpb.mkv").write_bytes(b"b")

    summary = _run(tmp_path, BadProbe(report), manifest)

    assert [r.status for r in summary.results] == [STATUS_FAIL, STATUS_CATALOGED]
    assert (tmp_path / "Alpha_tpb.mkv").exists()


def test_undeletable_manifest_marks_file_failed(tmp_path, probe, manifest, monkeypatch):
    (tmp_path / ENCODED).write_bytes(b"video")
    _run(tmp_path, probe, manifest)

    real_unlink = Path.unlink

    def unlink(self, *args, **kwargs):
        if self.suffix == ".md5":
            raise PermissionError(13, "Permission denied", str(self))
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", unlink)
    summary = _run(tmp_path, probe, manifest, reverse=True)

    [result] = summary.results
    assert result.status == STATUS_FAIL
    assert "could not be deleted" in result.message
    assert (tmp_path / "Inception.md5").exists()


def test_undeletable_sidecar_marks_file_failed(tmp_path, probe, manifest, monkeypatch):
    (tmp_path / ENCODED).write_bytes(b"video")
    _run(tmp_path, probe, manifest, info_only=True)

    def unlink(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "unlink", unlink)
    summary = _run(tmp_path, probe, manifest, reverse=True)

    [result] = summary.results
    assert result.status == STATUS_FAIL
    assert "Inception.mnfo" in result.message
