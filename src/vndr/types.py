import posixpath
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Annotated, Literal, NewType, Union

from annotated_types import Predicate

from vndr.defaults import GITHUB_BASE, RAW_GITHUB_BASE, URL_SCHEMES

_REPO_TOKEN_RE = re.compile(r"[^/]+/[^/]+")


def is_http_url(token) -> bool:
    if not isinstance(token, str):
        return False
    return token.startswith(URL_SCHEMES)


def is_repo_token(token) -> bool:
    if not isinstance(token, str) or is_http_url(token):
        return False
    return "/" in token and _REPO_TOKEN_RE.fullmatch(token) is not None


THttpUrl = Annotated[NewType("THttpUrl", str), Predicate(is_http_url)]
TRepoToken = Annotated[NewType("TRepoToken", str), Predicate(is_repo_token)]
"""
TRepoToken is an `owner/name` string: exactly one slash, both sides non-empty, no URL scheme.
"""

GitHubUrlKind = Literal["blob", "tree"]


def github_clone_url(repo: str) -> str:
    return f"{GITHUB_BASE}/{repo}.git"


@dataclass(frozen=True)
class GitHubBlob:
    """A single file at a revision: github.com/<owner>/<repo>/blob/<ref>/<path>."""

    url: THttpUrl
    repo: str
    ref: str
    path: str

    @property
    def raw_url(self) -> str:
        return f"{RAW_GITHUB_BASE}/{self.repo}/{self.ref}/{self.path}"

    @property
    def filename(self) -> str:
        return PurePosixPath(self.path or self.url).name


@dataclass(frozen=True)
class GitHubTree:
    """A directory (or file) at a revision: github.com/<owner>/<repo>/tree/<ref>[/<path>]."""

    url: THttpUrl
    repo: str
    ref: str
    path: str

    @property
    def clone_url(self) -> str:
        return github_clone_url(self.repo)

    @property
    def subpath(self) -> str:
        """`path` with `.` and `..` segments folded; empty for the repository root."""
        norm = posixpath.normpath(self.path) if self.path else "."
        return "" if norm == "." else norm

    @property
    def dirname(self) -> str:
        return PurePosixPath(self.subpath or self.repo).name


@dataclass(frozen=True)
class GenericUrl:
    url: THttpUrl
    filename: str


@dataclass(frozen=True)
class RepoToken:
    owner: str
    name: str

    @property
    def repo(self) -> TRepoToken:
        return f"{self.owner}/{self.name}"

    @property
    def clone_url(self) -> str:
        return github_clone_url(self.repo)


@dataclass(frozen=True)
class PackageName:
    name: str

    @property
    def install_key(self) -> str:
        # Scoped names (@scope/pkg) are keyed by their last segment.
        return self.name.split("/")[-1]


Source = Union[GitHubBlob, GitHubTree, GenericUrl, RepoToken, PackageName]
"""
Source is the closed set of input kinds. Every token classifies to exactly one of them.
"""
