"""Download a file from the first candidate URL that exists."""

import logging
from pathlib import Path
from typing import Iterable, Optional

import httpx

from ..core.constants import DOWNLOAD_CHUNK_SIZE, PROBE_TIMEOUT
from .exceptions import DistributionNotFoundError, NativeBuildError

logger = logging.getLogger(__name__)


class Downloader:
    """Downloads distributions over HTTP.

    The download is skipped entirely when the destination already exists.
    Nothing is checksummed, so an interrupted transfer leaves a truncated
    file that later runs will treat as complete.
    """

    def __init__(self, client: Optional[httpx.Client] = None, probe_timeout: float = PROBE_TIMEOUT):
        """Initialize downloader.

        Args:
            client: HTTP client to use (a redirect-following client is created if omitted)
            probe_timeout: Connect/read timeout for existence probes, in seconds
        """
        self.client = client or httpx.Client(follow_redirects=True)
        self.probe_timeout = probe_timeout

    def download(self, urls: Iterable[str], destination: Path) -> Path:
        """Download the first existing URL to destination.

        Args:
            urls: Candidate URLs, tried strictly in order
            destination: Target file

        Returns:
            The destination path

        Raises:
            DistributionNotFoundError: If no candidate URL resolves
            NativeBuildError: If the transfer fails
        """
        urls = list(urls)
        destination = Path(destination)

        if destination.exists():
            logger.info(f"Downloaded file {destination} already exists")
            return destination

        for url in urls:
            if not self.url_exists(url):
                logger.debug(f"Not found: {url}")
                continue

            logger.info(f"Downloading {url} to {destination}")
            destination.parent.mkdir(parents=True, exist_ok=True)
            try:
                with self.client.stream("GET", url) as response:
                    response.raise_for_status()
                    with open(destination, "wb") as handle:
                        for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                            handle.write(chunk)
            except httpx.HTTPError as e:
                raise NativeBuildError(f"Failed to download {url}: {e}") from e
            except OSError as e:
                raise NativeBuildError(f"Failed to write {destination}: {e}") from e
            return destination

        raise DistributionNotFoundError(urls)

    def url_exists(self, url: str) -> bool:
        """Probe a URL with a HEAD request.

        Returns:
            True if the server answers with a status below 400, False on any
            error status or transport failure
        """
        try:
            response = self.client.head(url, timeout=self.probe_timeout)
        except httpx.HTTPError as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return False
        return response.status_code < 400

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Downloader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
