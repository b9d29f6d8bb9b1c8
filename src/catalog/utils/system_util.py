"""
Utility functions for running the external media probe.

Functions:
    - run_cmd: Executes a system command and returns its exit code along with its
      standard output and error streams.
    - require_binary: Resolves a binary on the system's PATH or raises
      ExternalToolUnavailable.
    - probe_media: Runs MediaInfo on a container and returns its report lines.
"""
import shutil
import subprocess
from pathlib import Path
from typing import List, Tuple

from catalog.errors import ExternalToolUnavailable, ProbeInvocationFailure
from catalog.utils.constants import MEDIAINFO_BIN, PROBE_TIMEOUT


def run_cmd(cmd: List[str], timeout: float | None = None) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr). Undecodable output bytes are replaced."""
    p = subprocess.run(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, encoding="utf-8", errors="replace", timeout=timeout
    )
    return p.returncode, p.stdout, p.stderr


def require_binary(binary: str) -> str:
    """Return the full path of `binary`, raising ExternalToolUnavailable if it is not on PATH."""
    resolved = shutil.which(binary)
    if resolved is None:
        raise ExternalToolUnavailable(f"'{binary}' not found on PATH. Install MediaInfo CLI first.")
    return resolved


def probe_media(path: Path, binary: str = MEDIAINFO_BIN, timeout: float | None = PROBE_TIMEOUT) -> List[str]:
    """
    Run the media probe on `path` and return its text report, one entry per line.

    The whole standard output is read before returning. A non-zero exit, an OS
    error while spawning or a timeout are reported as ProbeInvocationFailure.
    """
    try:
        code, out, err = run_cmd([binary, str(path.resolve())], timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ProbeInvocationFailure(f"{binary} timed out after {e.timeout}s", path) from e
    except OSError as e:
        raise ProbeInvocationFailure(f"could not run {binary}: {e}", path) from e
    except UnicodeDecodeError as e:
        raise ProbeInvocationFailure(f"could not read {binary} output: {e}", path) from e

    if code != 0:
        raise ProbeInvocationFailure(f"{binary} exited with code {code}: {err.strip()}", path)
    return out.splitlines()
