from __future__ import annotations

from pathlib import Path

from ..core import PackageInstaller
from ..defaults import NPM_DEPENDENCY_DIR, NPM_EXECUTABLE
from ..types import PackageName
from .process import run_command


class NpmCli(PackageInstaller):
    def __init__(self, executable: str = NPM_EXECUTABLE) -> None:
        self._npm = executable

    def init(self, cwd: Path) -> None:
        run_command([self._npm, "init", "-y"], cwd=cwd)

    def install(self, name: str, cwd: Path) -> None:
        run_command([self._npm, "install", name], cwd=cwd)

    def installed_path(self, name: str, cwd: Path) -> Path:
        return Path(cwd) / NPM_DEPENDENCY_DIR / PackageName(name).install_key
