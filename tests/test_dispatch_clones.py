from __future__ import annotations

from pathlib import Path

import pytest

from vndr.errors import CommandError, PathNotFoundError

HELLO = "https://github.com/octo/hello.git"
HELLO_FILES = {
    "README.md": "# hello\n",
    "packages/core/index.js": "module.exports = 1;\n",
    "packages/core/lib/a.js": "a\n",
    "packages/cli/bin.js": "b\n",
}


@pytest.fixture
def hello(vcs):
    vcs.repos[HELLO] = dict(HELLO_FILES)
    return vcs


def _scratch_left(scratch_root: Path) -> list[Path]:
    return list(scratch_root.iterdir())


def test_tree_subpath_is_copied_under_its_last_segment(dispatcher, hello, target_dir, scratch_root):
    dest = dispatcher.vendor("https://github.com/octo/hello/tree/dev/packages/core")

    assert dest == target_dir / "core"
    assert (dest / "index.js").read_text(encoding="utf-8") == "module.exports = 1;\n"
    assert (dest / "lib" / "a.js").exists()
    assert not (target_dir / "cli").exists()
    (call,) = hello.calls
    assert call.url == HELLO
    assert call.branch == "dev"
    assert call.dest.parent == scratch_root
    assert not call.dest.exists()
    assert _scratch_left(scratch_root) == []


def test_tree_without_subpath_is_named_after_repo(dispatcher, hello, target_dir, scratch_root):
    dest = dispatcher.vendor("https://github.com/octo/hello/tree/main")

    assert dest == target_dir / "hello"
    assert (dest / "README.md").exists()
    assert (dest / "packages" / "cli" / "bin.js").exists()
    assert not (dest / ".git").exists()
    assert _scratch_left(scratch_root) == []


def test_tree_single_file_path(dispatcher, hello, target_dir):
    dest = dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/cli/bin.js")

    assert dest == target_dir / "bin.js"
    assert dest.is_file()


def test_tree_merges_into_existing_directory(dispatcher, hello, target_dir):
    (target_dir / "core").mkdir(parents=True)
    (target_dir / "core" / "local.txt").write_text("mine\n", encoding="utf-8")
    (target_dir / "core" / "index.js").write_text("stale\n", encoding="utf-8")

    dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/core")

    assert (target_dir / "core" / "local.txt").exists()
    assert (target_dir / "core" / "index.js").read_text(encoding="utf-8") == "module.exports = 1;\n"


def test_tree_missing_path_fails_and_cleans_up(dispatcher, hello, target_dir, scratch_root):
    with pytest.raises(PathNotFoundError, match="Path 'packages/nope' not found in repository"):
        dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/nope")

    assert not (target_dir / "nope").exists()
    assert _scratch_left(scratch_root) == []


def test_tree_path_escaping_clone_is_not_found(dispatcher, hello, scratch_root):
    with pytest.raises(PathNotFoundError):
        dispatcher.vendor("https://github.com/octo/hello/tree/main/../..")
    assert _scratch_left(scratch_root) == []


def test_tree_clone_failure_cleans_up(dispatcher, vcs, scratch_root):
    vcs.failing.add(HELLO)

    with pytest.raises(CommandError, match="not found"):
        dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/core")

    assert _scratch_left(scratch_root) == []


def test_repo_token_clones_into_owner_name_without_git(dispatcher, hello, target_dir, scratch_root):
    dest = dispatcher.vendor("octo/hello")

    assert dest == target_dir / "octo" / "hello"
    assert (dest / "README.md").read_text(encoding="utf-8") == "# hello\n"
    assert not (dest / ".git").exists()
    (call,) = hello.calls
    assert call.url == HELLO
    assert call.branch is None
    assert call.dest == dest
    # No scratch space for whole-repo clones.
    assert _scratch_left(scratch_root) == []


def test_repo_token_failed_clone_propagates(dispatcher, vcs, target_dir):
    vcs.failing.add(HELLO)

    with pytest.raises(CommandError) as excinfo:
        dispatcher.vendor("octo/hello")

    assert excinfo.value.returncode == 128
    assert "fatal: repository" in str(excinfo.value)


def test_tree_path_ending_in_parent_stays_inside_target(dispatcher, hello, target_dir, scratch_root):
    dest = dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/core/..")

    assert dest == target_dir / "packages"
    assert (dest / "core" / "index.js").exists()
    assert (dest / "cli" / "bin.js").exists()
    assert sorted(p.name for p in target_dir.parent.iterdir()) == ["scratch", "vndr"]
    assert _scratch_left(scratch_root) == []


def test_tree_dot_path_is_the_whole_repo(dispatcher, hello, target_dir):
    dest = dispatcher.vendor("https://github.com/octo/hello/tree/main/.")

    assert dest == target_dir / "hello"
    assert (dest / "README.md").exists()
    assert not (dest / ".git").exists()
    assert not (target_dir / "README.md").exists()


def test_tree_path_resolving_above_repo_root_is_rejected(dispatcher, hello, target_dir, scratch_root):
    with pytest.raises(PathNotFoundError):
        dispatcher.vendor("https://github.com/octo/hello/tree/main/packages/../..")

    assert hello.calls == []
    assert list(target_dir.iterdir()) == []
    assert _scratch_left(scratch_root) == []
