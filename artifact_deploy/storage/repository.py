# artifact_deploy/storage/repository.py
"""Maven / Nexus style binary repository source"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Dict, Any, Callable, List

import httpx
from packaging.version import InvalidVersion, Version

from .http import HttpSource
from ..api.exceptions import ConfigurationError, RetrievalError
from ..constants import MAVEN_METADATA_FILE
from ..models.artifact import Location, RepositoryCoordinate


class RepositorySource(HttpSource):
    """Pulls artifacts by coordinate from a Maven-layout repository"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize repository source

        Args:
            config: Configuration including:
                - url: Repository server URL
                - repository: Repository name appended to the URL (optional)
                - username / password: Basic auth credentials (optional)
                - timeout: Request timeout in seconds
                - transport: httpx transport override (optional)
        """
        config = dict(config or {})
        if config.get('username') and not config.get('auth'):
            config['auth'] = (config['username'], config.get('password') or "")
        super().__init__(config)

        url = self.config.get('url')
        repository = self.config.get('repository')
        self.base_url = url.rstrip('/') if url else None
        if self.base_url and repository:
            self.base_url = f"{self.base_url}/{repository.strip('/')}"

    def _require_base_url(self) -> str:
        if not self.base_url:
            raise ConfigurationError("Repository URL is not configured (repository.url)")
        return self.base_url

    def artifact_url(self, coordinate: RepositoryCoordinate) -> str:
        """URL of an artifact file in the repository layout"""
        base = self._require_base_url()
        return (
            f"{base}/{coordinate.group_path}/{coordinate.artifact_id}/"
            f"{coordinate.version}/{coordinate.filename}"
        )

    def metadata_url(self, coordinate: RepositoryCoordinate) -> str:
        """URL of the artifact's version metadata"""
        base = self._require_base_url()
        return f"{base}/{coordinate.group_path}/{coordinate.artifact_id}/{MAVEN_METADATA_FILE}"

    async def fetch(self,
                    location: Location,
                    destination: Path,
                    checksum: Optional[str] = None,
                    callback: Optional[Callable[[int, int], None]] = None) -> Path:
        """Pull the coordinate unless the cached file matches the checksum"""
        if not isinstance(location, RepositoryCoordinate):
            raise ConfigurationError(f"Repository source cannot fetch {location}")

        if await self.matches_checksum(destination, checksum):
            self.logger.info(f"Cached {destination} matches checksum, skipping pull")
            return destination

        await self.download(self.artifact_url(location), destination, checksum, callback)
        return destination

    async def resolve_version(self, location: Location) -> str:
        """Resolve 'latest' from the repository's maven-metadata.xml

        Preference: <release>, then <latest>, then the highest listed
        version.
        """
        if not isinstance(location, RepositoryCoordinate):
            raise ConfigurationError(f"Repository source cannot resolve {location}")

        await self.initialize()
        url = self.metadata_url(location)

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RetrievalError(f"Failed to read version metadata {url}: {e}") from e

        try:
            root = ET.fromstring(response.content)
        except ET.ParseError as e:
            raise RetrievalError(f"Malformed version metadata {url}: {e}") from e

        for tag in ("versioning/release", "versioning/latest"):
            value = root.findtext(tag)
            if value and value.strip():
                return value.strip()

        versions = [v.text.strip() for v in root.findall("versioning/versions/version") if v.text]
        if not versions:
            raise RetrievalError(f"No versions listed in {url}")

        return self._highest(versions)

    @staticmethod
    def _highest(versions: List[str]) -> str:
        def sort_key(value: str):
            try:
                return (1, Version(value), value)
            except InvalidVersion:
                return (0, Version("0"), value)

        return max(versions, key=sort_key)
