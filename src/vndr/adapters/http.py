from __future__ import annotations

import logging
import os
from typing import Dict, Optional
from urllib.parse import urlparse

import requests

from ..core import FetchResult, HttpFetcher
from ..defaults import DEFAULT_HTTP_TIMEOUT, GITHUB_HOSTS
from ..errors import DownloadError

logger = logging.getLogger(__name__)


def _is_github_host(url: str) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return host in GITHUB_HOSTS or host.endswith(".github.com")


class RequestsFetcher(HttpFetcher):
    """
    GET whole response bodies with a shared `requests.Session`.

    GITHUB_TOKEN, when set, is sent only to GitHub hosts so private blobs resolve;
    other hosts never see it. requests drops the header itself on cross-host redirects.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        token: Optional[str] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._session = session or requests.Session()
        self._token = os.getenv("GITHUB_TOKEN") if token is None else token
        self._timeout = timeout

    def _headers_for(self, url: str) -> Dict[str, str]:
        if self._token and _is_github_host(url):
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def get(self, url: str) -> FetchResult:
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(
                url, headers=self._headers_for(url), timeout=self._timeout, allow_redirects=True
            )
        except requests.RequestException as e:
            raise DownloadError(url, None, str(e)) from e
        ok = 200 <= resp.status_code < 300
        logger.debug("GET %s -> %s", url, resp.status_code)
        return FetchResult(
            status_code=resp.status_code,
            content=resp.content if ok else b"",
            text="" if ok else resp.text,
        )
