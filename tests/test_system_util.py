import stat
import sys

import pytest

from catalog.errors import ExternalToolUnavailable, ProbeInvocationFailure
from catalog.utils import system_util

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")


def _script(tmp_path, body):
    script = tmp_path / "fake-mediainfo"
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


def test_probe_returns_report_lines(tmp_path):
    binary = _script(tmp_path, "printf 'General\\nComplete name : %s\\n' \"$1\"")
    video = tmp_path / "Heat.mkv"
    video.write_bytes(b"")

    lines = system_util.probe_media(video, binary=binary, timeout=10)

    assert lines == ["General", f"Complete name : {video.resolve()}"]


def test_probe_replaces_undecodable_bytes(tmp_path):
    binary = _script(tmp_path, "printf 'Title : caf\\351\\n'")

    lines = system_util.probe_media(tmp_path / "Cafe.mkv", binary=binary, timeout=10)

    assert lines == ["Title : caf\ufffd"]


def test_probe_nonzero_exit(tmp_path):
    binary = _script(tmp_path, "echo broken >&2; exit 3")

    with pytest.raises(ProbeInvocationFailure) as excinfo:
        system_util.probe_media(tmp_path / "Heat.mkv", binary=binary, timeout=10)

    assert "code 3" in str(excinfo.value)
    assert "broken" in str(excinfo.value)


def test_probe_timeout(tmp_path):
    binary = _script(tmp_path, "exec sleep 5")

    with pytest.raises(ProbeInvocationFailure) as excinfo:
        system_util.probe_media(tmp_path / "Heat.mkv", binary=binary, timeout=0.5)

    assert "timed out" in str(excinfo.value)


def test_probe_spawn_error(tmp_path):
    with pytest.raises(ProbeInvocationFailure):
        system_util.probe_media(tmp_path / "Heat.mkv", binary=str(tmp_path / "missing-binary"), timeout=10)


def test_require_binary(tmp_path):
    assert system_util.require_binary("sh")
    with pytest.raises(ExternalToolUnavailable):
        system_util.require_binary("no-such-mediainfo-binary-here")
