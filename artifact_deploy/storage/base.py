# artifact_deploy/storage/base.py
"""Artifact source abstract base class"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Dict, Any, Callable

from ..constants import DEFAULT_CHECKSUM_ALGORITHM
from ..models.artifact import Location
from ..utils.hash_utils import calculate_file_hash_async, checksums_match


class ArtifactSource(ABC):
    """Abstract base class for all artifact sources"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize artifact source

        Args:
            config: Source-specific configuration
        """
        self.config = config or {}
        self.checksum_algorithm = self.config.get('checksum_algorithm', DEFAULT_CHECKSUM_ALGORITHM)
        self.logger = logging.getLogger(self.__class__.__name__)
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize source (e.g., open connections)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    async def _do_initialize(self) -> None:
        """Actual initialization logic, overridden by subclasses"""
        pass

    @abstractmethod
    async def fetch(self,
                    location: Location,
                    destination: Path,
                    checksum: Optional[str] = None,
                    callback: Optional[Callable[[int, int], None]] = None) -> Path:
        """
        Place the artifact at ``destination``

        Args:
            location: Classified artifact location
            destination: Cached file path to create
            checksum: Expected checksum (optional)
            callback: Progress callback (bytes_transferred, total_bytes)

        Returns:
            Path to the cached file
        """
        pass

    async def resolve_version(self, location: Location) -> str:
        """Resolve the 'latest' sentinel to a concrete version"""
        raise NotImplementedError(
            f"{self.__class__.__name__} cannot resolve the latest version of {location}"
        )

    async def matches_checksum(self, path: Path, checksum: Optional[str]) -> bool:
        """Check an existing file against the expected checksum"""
        if not checksum or not path.is_file():
            return False
        actual = await calculate_file_hash_async(path, self.checksum_algorithm)
        return checksums_match(actual, checksum)

    async def close(self) -> None:
        """Close source connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic, overridden by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
