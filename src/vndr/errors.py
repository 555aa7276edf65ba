from __future__ import annotations

import shlex


class VndrError(Exception):
    """Base class for every failure that aborts vendoring of an input."""


class InvalidGitHubUrlError(VndrError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Not a valid GitHub URL: {url}")


class DownloadError(VndrError):
    """
    Raised when a single-file fetch fails.

    `status_code` is None when the request never produced a response (DNS, TLS,
    connection reset...); `body` then holds the transport error text instead.
    """

    def __init__(self, url: str, status_code: int | None, body: str) -> None:
        self.url = url
        self.status_code = status_code
        self.body = body
        if status_code is None:
            msg = f"Failed to download {url}: {body}"
        else:
            msg = f"Failed to download {url}: {status_code} - {body}"
        super().__init__(msg)


class PathNotFoundError(VndrError):
    def __init__(self, path: str, where: str = "repository") -> None:
        self.path = path
        self.where = where
        super().__init__(f"Path '{path}' not found in {where}")


class CommandError(VndrError):
    """An external tool was missing or exited non-zero. Carries the tool's own stderr."""

    def __init__(self, cmd: list[str], returncode: int | None, stderr: str) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"Command not found: {cmd[0]}"
        else:
            msg = f"Command failed with exit code {returncode}: {shlex.join(cmd)}"
        detail = stderr.strip()
        if detail:
            msg = f"{msg}\n{detail}"
        super().__init__(msg)
