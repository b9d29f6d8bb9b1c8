from catalog.utils import hash_util


def test_manifest_lists_md5_of_each_file(tmp_path):
    video = tmp_path / "Heat.mkv"
    sidecar = tmp_path / "Heat.mnfo"
    video.write_bytes(b"abc")
    sidecar.write_bytes(b"")

    hash_util.write_manifest(tmp_path / "Heat.md5", [video, sidecar])

    lines = (tmp_path / "Heat.md5").read_text().splitlines()
    assert lines[0].startswith("; Generated by cataloguer")
    assert lines[1:] == [
        "900150983cd24fb0d6963f7d28e17f72 *Heat.mkv",
        "d41d8cd98f00b204e9800998ecf8427e *Heat.mnfo",
    ]
