# artifact_deploy/storage/http.py
"""HTTP(S) artifact source"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Callable

import aiofiles
import httpx

from .base import ArtifactSource
from ..api.exceptions import ChecksumMismatch, ConfigurationError, RetrievalError
from ..constants import DEFAULT_HTTP_TIMEOUT
from ..models.artifact import HttpLocation, Location
from ..utils.hash_utils import calculate_file_hash_async, checksums_match


class HttpSource(ArtifactSource):
    """Downloads artifacts from a direct http(s) URL"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize HTTP source

        Args:
            config: Configuration including:
                - timeout: Request timeout in seconds
                - headers: Extra request headers
                - auth: (username, password) tuple (optional)
                - transport: httpx transport override (optional)
        """
        super().__init__(config)
        self.timeout = float(self.config.get('timeout', DEFAULT_HTTP_TIMEOUT))
        self.headers = dict(self.config.get('headers') or {})
        self._client: Optional[httpx.AsyncClient] = None

    async def _do_initialize(self) -> None:
        """Open the HTTP client"""
        kwargs = {
            "timeout": self.timeout,
            "headers": self.headers,
            "follow_redirects": True,
        }
        if self.config.get('auth'):
            kwargs["auth"] = tuple(self.config['auth'])
        if self.config.get('transport') is not None:
            kwargs["transport"] = self.config['transport']

        self._client = httpx.AsyncClient(**kwargs)

    async def _do_close(self) -> None:
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self,
                    location: Location,
                    destination: Path,
                    checksum: Optional[str] = None,
                    callback: Optional[Callable[[int, int], None]] = None) -> Path:
        """Download the URL unless a matching file is already cached

        An existing file is reused when no checksum is configured or when
        its checksum matches; otherwise the file is downloaded again and
        verified.
        """
        if not isinstance(location, HttpLocation):
            raise ConfigurationError(f"HTTP source cannot fetch {location}")

        if destination.is_file():
            if not checksum:
                self.logger.info(f"Using cached {destination}")
                return destination
            if await self.matches_checksum(destination, checksum):
                self.logger.info(f"Cached {destination} matches checksum, skipping download")
                return destination

        await self.download(location.url, destination, checksum, callback)
        return destination

    async def download(self,
                       url: str,
                       destination: Path,
                       checksum: Optional[str] = None,
                       callback: Optional[Callable[[int, int], None]] = None) -> Path:
        """
        Stream a URL into ``destination``

        The body is written to a ``.part`` file which is renamed into place
        once complete and verified.

        Raises:
            RetrievalError: On HTTP or I/O failure
            ChecksumMismatch: If the downloaded file does not match
        """
        await self.initialize()

        destination.parent.mkdir(parents=True, exist_ok=True)
        temp_path = destination.with_name(destination.name + ".part")

        self.logger.info(f"Downloading {url} to {destination}")
        try:
            async with self._client.stream("GET", url) as response:
                response.raise_for_status()
                total = int(response.headers.get("content-length", 0))
                transferred = 0

                async with aiofiles.open(temp_path, 'wb') as f:
                    async for chunk in response.aiter_bytes():
                        await f.write(chunk)
                        transferred += len(chunk)
                        if callback:
                            callback(transferred, total)

        except httpx.HTTPError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise RetrievalError(f"Failed to download {url}: {e}") from e

        if checksum:
            actual = await calculate_file_hash_async(temp_path, self.checksum_algorithm)
            if not checksums_match(actual, checksum):
                temp_path.unlink()
                raise ChecksumMismatch(str(destination), checksum, actual)

        os.replace(temp_path, destination)
        return destination
