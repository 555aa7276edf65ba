from __future__ import annotations

from pathlib import Path

from ..core import VcsClient
from ..defaults import GIT_EXECUTABLE
from .process import run_command


class GitCli(VcsClient):
    def __init__(self, executable: str = GIT_EXECUTABLE) -> None:
        self._git = executable

    def clone(self, url: str, dest: Path, *, branch: str | None = None) -> None:
        cmd = [self._git, "clone", "--depth", "1"]
        if branch:
            cmd += ["--branch", branch]
        cmd += [url, str(dest)]
        run_command(cmd)
