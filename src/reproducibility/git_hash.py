"""Git hash capture so a summary can be traced to the code that produced it."""

import subprocess
from pathlib import Path


def _git(args: list[str], cwd: Path | None) -> str:
    return subprocess.check_output(
        ["git", *args], cwd=cwd, stderr=subprocess.DEVNULL
    ).decode().strip()


def get_git_hash(cwd: str | Path | None = None) -> str:
    """Short SHA of HEAD, with "-dirty" appended for uncommitted changes.

    Args:
        cwd: Directory inside the repository (default: current directory).

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout.
    """
    cwd = Path(cwd) if cwd is not None else None
    try:
        sha = _git(["rev-parse", "--short", "HEAD"], cwd)
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return "unknown"

    for diff_args in (["diff", "--quiet"], ["diff", "--quiet", "--cached"]):
        try:
            _git(diff_args, cwd)
        except subprocess.CalledProcessError:
            return sha + "-dirty"

    return sha
