from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator

from ..defaults import SCRATCH_PREFIX

logger = logging.getLogger(__name__)


@contextmanager
def scratch_dir(root: Path | None = None) -> Iterator[Path]:
    """
    Create an operation-scoped scratch directory and always remove it on exit.

    The name is `vndr-<random>` under `root` (the system temp dir by default), so
    back-to-back operations never share a directory.
    """
    if root is not None:
        Path(root).mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=root))
    logger.debug("Created scratch directory %s", path)
    try:
        yield path
    except BaseException:
        # The body's error is the one to report; a failed cleanup only gets logged.
        try:
            remove_tree(path)
        except OSError:
            logger.warning("Could not remove scratch directory %s", path, exc_info=True)
        raise
    remove_tree(path)
    logger.debug("Removed scratch directory %s", path)


def remove_tree(path: Path) -> None:
    """Recursive remove that tolerates a missing path."""
    p = Path(path)
    if p.is_symlink() or p.is_file():
        p.unlink()
        return
    if p.is_dir():
        shutil.rmtree(p)


def _ignore_at_root(root: Path, names: Iterable[str]) -> Callable[[str, list[str]], list[str]]:
    skip = set(names)

    def ignore(directory: str, entries: list[str]) -> list[str]:
        if Path(directory) != root:
            return []
        return [e for e in entries if e in skip]

    return ignore


def copy_path(src: Path, dest: Path, *, skip_at_root: Iterable[str] = ()) -> None:
    """
    Copy a file or a directory tree to `dest`.

    Directories merge into an existing `dest`, overwriting files with the same name.
    Symlinks are copied as symlinks. Entries named in `skip_at_root` are left out,
    but only directly under `src`.
    """
    src = Path(src)
    dest = Path(dest)
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(
            src,
            dest,
            symlinks=True,
            dirs_exist_ok=True,
            ignore=_ignore_at_root(src, skip_at_root) if skip_at_root else None,
        )
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.is_dir() and not dest.is_symlink():
        shutil.rmtree(dest)
    shutil.copy2(src, dest, follow_symlinks=False)


def is_within(path: Path, root: Path) -> bool:
    try:
        Path(path).resolve().relative_to(Path(root).resolve())
    except ValueError:
        return False
    return True
