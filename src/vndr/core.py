from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol

from .adapters.filesystem import copy_path, is_within, remove_tree, scratch_dir
from .defaults import VCS_METADATA_DIR
from .errors import DownloadError, PathNotFoundError
from .types import GenericUrl, GitHubBlob, GitHubTree, PackageName, RepoToken, Source
from .util import classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    content: bytes
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Writer(Protocol):
    def write(self, text: str) -> None: ...


class HttpFetcher(Protocol):
    def get(self, url: str) -> FetchResult: ...


class VcsClient(Protocol):
    def clone(self, url: str, dest: Path, *, branch: Optional[str] = None) -> None: ...


class PackageInstaller(Protocol):
    def init(self, cwd: Path) -> None: ...
    def install(self, name: str, cwd: Path) -> None: ...
    def installed_path(self, name: str, cwd: Path) -> Path: ...


class StdoutWriter(Writer):
    """Progress lines for a terminal user."""

    def write(self, text: str) -> None:
        sys.stdout.write(text)


class StringWriter(Writer):
    """Keeps progress lines in memory so `main` can run without a terminal."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def text(self) -> str:
        return "".join(self._parts)


@dataclass(frozen=True)
class VendorConfig:
    """Everything a Dispatcher needs. Built once at startup and never mutated."""

    target_dir: Path
    fetcher: HttpFetcher
    vcs: VcsClient
    installer: PackageInstaller
    scratch_root: Optional[Path] = None


class Dispatcher:
    """
    Vendors input tokens into `config.target_dir`, one after another.

    Each token is classified once into a `Source` and handled by the matching
    `_vendor_*` method. Every method returns the path it placed under the target.
    """

    def __init__(self, config: VendorConfig, writer: Writer) -> None:
        self.config = config
        self.writer = writer

    @property
    def target_dir(self) -> Path:
        return Path(self.config.target_dir)

    def vendor_all(self, tokens: Iterable[str]) -> list[Path]:
        # Strictly sequential: the first failure propagates and later tokens are never attempted.
        return [self.vendor(token) for token in tokens]

    def vendor(self, token: str) -> Path:
        self.target_dir.mkdir(parents=True, exist_ok=True)
        source = classify(token)
        logger.debug("Classified %r as %s", token, type(source).__name__)
        return self.vendor_source(source)

    def vendor_source(self, source: Source) -> Path:
        if isinstance(source, GitHubBlob):
            return self._vendor_blob(source)
        if isinstance(source, GitHubTree):
            return self._vendor_tree(source)
        if isinstance(source, GenericUrl):
            return self._vendor_url(source)
        if isinstance(source, RepoToken):
            return self._vendor_repo(source)
        if isinstance(source, PackageName):
            return self._vendor_package(source)
        msg = f"Unhandled source kind: {source!r}"
        raise TypeError(msg)

    def download_file(self, url: str, dest: Path) -> None:
        result = self.config.fetcher.get(url)
        if not result.ok:
            raise DownloadError(url, result.status_code, result.text)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(result.content)

    def _dest_for(self, name: str, path: str, where: str) -> Path:
        # Every artifact lands strictly inside the target directory.
        dest = self.target_dir / name
        if name in ("", ".", "..") or not is_within(dest, self.target_dir):
            raise PathNotFoundError(path, where)
        return dest

    def _vendor_blob(self, source: GitHubBlob) -> Path:
        dest = self._dest_for(source.filename, source.path, source.repo)
        self.download_file(source.raw_url, dest)
        self.writer.write(f"✓ Downloaded {source.filename} to {self.target_dir}\n")
        return dest

    def _vendor_url(self, source: GenericUrl) -> Path:
        dest = self._dest_for(source.filename, source.url, "URL")
        self.download_file(source.url, dest)
        self.writer.write(f"✓ Downloaded {source.filename} to {self.target_dir}\n")
        return dest

    def _vendor_tree(self, source: GitHubTree) -> Path:
        self.writer.write(f"📦 Downloading directory from {source.repo}...\n")
        dest = self._dest_for(source.dirname, source.path, source.repo)
        with scratch_dir(self.config.scratch_root) as scratch:
            self.config.vcs.clone(source.clone_url, scratch, branch=source.ref)
            src = scratch / source.subpath if source.subpath else scratch
            if not src.exists() or not is_within(src, scratch):
                raise PathNotFoundError(source.path)
            # A whole-repo copy leaves the clone's own metadata behind.
            skip = () if source.subpath else (VCS_METADATA_DIR,)
            copy_path(src, dest, skip_at_root=skip)
        self.writer.write(f"✓ Downloaded {source.subpath or source.repo} to {dest}\n")
        return dest

    def _vendor_repo(self, source: RepoToken) -> Path:
        self.writer.write(f"📦 Cloning {source.repo} from GitHub...\n")
        dest = self.target_dir / source.owner / source.name
        dest.parent.mkdir(parents=True, exist_ok=True)
        self.config.vcs.clone(source.clone_url, dest)
        remove_tree(dest / VCS_METADATA_DIR)
        self.writer.write(f"✓ Downloaded {source.repo} to {dest}\n")
        return dest

    def _vendor_package(self, source: PackageName) -> Path:
        installer = self.config.installer
        dest = self.target_dir / source.name
        with scratch_dir(self.config.scratch_root) as scratch:
            installer.init(scratch)
            self.writer.write(f"📦 Installing {source.name} from npm...\n")
            installer.install(source.name, scratch)
            installed = installer.installed_path(source.name, scratch)
            if not installed.is_dir():
                raise PathNotFoundError(str(installed), f"npm install of {source.name}")
            dest.mkdir(parents=True, exist_ok=True)
            for entry in sorted(installed.iterdir()):
                copy_path(entry, dest / entry.name)
        self.writer.write(f"✓ Downloaded {source.name} to {dest}\n")
        return dest
