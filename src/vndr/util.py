from __future__ import annotations

import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from typeguard import typechecked

from .errors import InvalidGitHubUrlError
from .types import (
    GenericUrl,
    GitHubBlob,
    GitHubTree,
    GitHubUrlKind,
    PackageName,
    RepoToken,
    Source,
    is_http_url,
    is_repo_token,
)

GITHUB_URL_RE = re.compile(r"github\.com/([^/]+/[^/]+)/(blob|tree)/([^/]+)/?(.*)")


def parse_github_url(url: str) -> tuple[str, GitHubUrlKind, str, str] | None:
    """
    Split a GitHub web URL into (repo, kind, ref, path).

    Examples:
    - https://github.com/o/r/blob/main/src/a.py -> ("o/r", "blob", "main", "src/a.py")
    - https://github.com/o/r/tree/v1.2          -> ("o/r", "tree", "v1.2", "")

    Returns None for anything that is not a blob or tree URL, including bare
    repository URLs like https://github.com/o/r.
    """
    m = GITHUB_URL_RE.search(url)
    if not m:
        return None
    repo, kind, ref, path = m.groups()
    return repo, kind, ref, path


def is_github_url(token: str) -> bool:
    return is_http_url(token) and "github.com" in token


def url_filename(url: str) -> str:
    """Last segment of the URL path; query and fragment don't count. Falls back to the host."""
    parsed = urlparse(url)
    name = PurePosixPath(unquote(parsed.path)).name
    return name or parsed.netloc


@typechecked
def classify(token: str) -> Source:
    if is_http_url(token):
        if is_github_url(token):
            parsed = parse_github_url(token)
            if parsed is None:
                raise InvalidGitHubUrlError(token)
            repo, kind, ref, path = parsed
            if kind == "blob":
                return GitHubBlob(url=token, repo=repo, ref=ref, path=path)
            return GitHubTree(url=token, repo=repo, ref=ref, path=path)
        return GenericUrl(url=token, filename=url_filename(token))
    if is_repo_token(token):
        owner, name = token.split("/")
        return RepoToken(owner=owner, name=name)
    return PackageName(name=token)
