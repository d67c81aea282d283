"""Local filesystem artifact source"""

import asyncio
import os
from pathlib import Path
from typing import Optional, Dict, Any, Callable

from .base import ArtifactSource
from ..api.exceptions import ChecksumMismatch, ConfigurationError, SourceNotFoundError
from ..models.artifact import LocalPath, Location
from ..utils.file_utils import copy_with_progress
from ..utils.hash_utils import calculate_file_hash_async, checksums_match


class LocalSource(ArtifactSource):
    """Copies an artifact that already exists on the local filesystem"""

    async def fetch(self,
                    location: Location,
                    destination: Path,
                    checksum: Optional[str] = None,
                    callback: Optional[Callable[[int, int], None]] = None) -> Path:
        """
        Copy a local file into the cache

        Raises:
            SourceNotFoundError: If the source file is gone
            ChecksumMismatch: If the copied file does not match
        """
        if not isinstance(location, LocalPath):
            raise ConfigurationError(f"Local source cannot fetch {location}")

        source = Path(location.path)
        if not source.is_file():
            raise SourceNotFoundError(str(source))

        if destination.exists() and os.path.samefile(source, destination):
            self.logger.debug(f"Source {source} is already in place")
        elif await self.matches_checksum(destination, checksum):
            self.logger.info(f"Cached {destination} matches checksum, skipping copy")
            return destination
        else:
            destination.parent.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Copying {source} to {destination}")
            await asyncio.get_running_loop().run_in_executor(
                None,
                copy_with_progress,
                source,
                destination,
                callback
            )

        if checksum:
            actual = await calculate_file_hash_async(destination, self.checksum_algorithm)
            if not checksums_match(actual, checksum):
                raise ChecksumMismatch(str(destination), checksum, actual)

        return destination
