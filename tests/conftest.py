from __future__ import annotations

from pathlib import Path

import pytest

from vndr.core import Dispatcher, StringWriter, VendorConfig

from fakes import FakeFetcher, FakeInstaller, FakeVcs


@pytest.fixture(autouse=True)
def _no_github_token(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GITHUB_TOKEN out of header assertions."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    return tmp_path / "vndr"


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def vcs() -> FakeVcs:
    return FakeVcs()


@pytest.fixture
def installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture
def config(target_dir, scratch_root, fetcher, vcs, installer) -> VendorConfig:
    return VendorConfig(
        target_dir=target_dir,
        fetcher=fetcher,
        vcs=vcs,
        installer=installer,
        scratch_root=scratch_root,
    )


@pytest.fixture
def writer() -> StringWriter:
    return StringWriter()


@pytest.fixture
def dispatcher(config: VendorConfig, writer: StringWriter) -> Dispatcher:
    return Dispatcher(config, writer)
