"""Web fetcher: download a page and split it into head, body and links."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

import requests
from bs4 import BeautifulSoup

from pagemind.errors import FetchFailed
from pagemind.ingestion.models import PageContent

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "PageMind-Ingestor/0.1",
    "Accept": "text/html,application/xhtml+xml",
}


def classify_links(hrefs: Iterable[str | None]) -> tuple[list[str], list[str]]:
    """Split anchor hrefs into ``(internal, external)`` unique, sorted lists.

    Hrefs starting with ``http`` (which covers ``https``) are external, a
    bare ``"/"`` is dropped, anything else is internal.
    """
    internal: set[str] = set()
    external: set[str] = set()
    for href in hrefs:
        if href is None or href == "/":
            continue
        if href.startswith("http"):
            external.add(href)
        else:
            internal.add(href)
    return sorted(internal), sorted(external)


def parse_page(url: str, html: str) -> PageContent:
    """Extract head / body inner HTML and anchor links from *html*."""
    soup = BeautifulSoup(html, "html.parser")
    head = soup.head.decode_contents() if soup.head else ""
    body = soup.body.decode_contents() if soup.body else ""

    internal, external = classify_links(a.get("href") for a in soup.find_all("a"))
    return PageContent(
        url=url,
        metadata=head,
        body=body,
        internal_links=internal,
        external_links=external,
    )


class WebFetcher:
    """Fetch pages over HTTP with retries.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    max_retries:
        Attempts for transient HTTP errors (exponential backoff between).
    session:
        Optional pre-configured :class:`requests.Session`.
    """

    def __init__(
        self,
        *,
        timeout: int = 30,
        max_retries: int = 3,
        session: requests.Session | None = None,
        backoff_base: float = 2.0,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff_base = backoff_base
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)

    def fetch(self, url: str) -> PageContent:
        """Download *url* and return its parsed content.

        Raises
        ------
        FetchFailed
            When every attempt fails.
        """
        last_exc: requests.RequestException | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self._session.get(url, timeout=self.timeout)
                resp.raise_for_status()
                break
            except requests.RequestException as exc:
                last_exc = exc
                if attempt < self.max_retries:
                    wait = self.backoff_base**attempt
                    logger.warning(
                        "Retry %d/%d for %s (wait %.1fs): %s",
                        attempt, self.max_retries, url, wait, exc,
                    )
                    time.sleep(wait)
        else:
            raise FetchFailed(
                url, f"giving up after {self.max_retries} attempts: {last_exc}"
            ) from last_exc

        page = parse_page(url, resp.text)
        logger.info(
            "Fetched %s (%d body chars, %d internal / %d external links)",
            url, len(page.body), len(page.internal_links), len(page.external_links),
        )
        return page

    def close(self) -> None:
        self._session.close()
