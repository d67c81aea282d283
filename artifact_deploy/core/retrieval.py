"""Retrieval strategy: one fetch contract over every location kind"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Type

from ..api.exceptions import ConfigurationError
from ..models.artifact import (
    ArtifactSpec,
    HttpLocation,
    LocalPath,
    Location,
    RepositoryCoordinate,
    classify_location,
    is_latest,
)
from ..models.config import DeployConfig
from ..models.release import DeployContext
from ..storage.base import ArtifactSource
from ..storage.factory import SourceFactory
from ..utils.async_utils import run_async

logger = logging.getLogger(__name__)


class RetrievalStrategy:
    """Resolves versions and places artifacts in the local cache

    Sources are created per call through the ``SourceFactory`` and driven
    synchronously; the async I/O stays inside the sources.
    """

    def __init__(self,
                 config: DeployConfig,
                 source_options: Optional[Dict[str, Any]] = None,
                 factory: Type[SourceFactory] = SourceFactory):
        """
        Args:
            config: Deploy configuration (repository / http settings)
            source_options: Extra options handed to every source
            factory: Source factory class
        """
        self.config = config
        self.source_options = source_options or {}
        self.factory = factory

    def source_for(self, location: Location) -> ArtifactSource:
        """Artifact source serving a location"""
        return self.factory.create_for_location(location, self.config, self.source_options)

    @staticmethod
    def classify(spec: ArtifactSpec) -> Location:
        """Classify the configured location string"""
        return classify_location(spec.location)

    @staticmethod
    def resolve_filename(location: Location) -> str:
        """Name of the cached file for a location"""
        if isinstance(location, (HttpLocation, RepositoryCoordinate, LocalPath)):
            return location.filename
        raise ConfigurationError(f"Unsupported artifact location: {location!r}")

    def resolve_version(self, spec: ArtifactSpec, location: Location) -> str:
        """
        Turn the requested version into a concrete one

        Raises:
            ConfigurationError: 'latest' over plain HTTP, or a coordinate
                whose version disagrees with the requested one
            RetrievalError: If the repository cannot be queried
        """
        requested = spec.version.strip()

        if isinstance(location, HttpLocation):
            if is_latest(requested):
                raise ConfigurationError(
                    "You cannot specify the latest version for an artifact when "
                    "attempting to download an artifact using http(s)!"
                )
            return requested

        if isinstance(location, RepositoryCoordinate):
            pinned = location.version
            if not is_latest(pinned) and not is_latest(requested) and pinned != requested:
                raise ConfigurationError(
                    f"Artifact coordinate {location} pins version {pinned} "
                    f"but version {requested} was requested"
                )

            if not is_latest(requested):
                return requested
            if not is_latest(pinned):
                return pinned

            version = run_async(self._resolve_latest(location))
            logger.info(f"Resolved latest version of {location} to {version}")
            return version

        if isinstance(location, LocalPath):
            return requested

        raise ConfigurationError(f"Unsupported artifact location: {location!r}")

    @staticmethod
    def pin(location: Location, version: str) -> Location:
        """Location with the resolved version applied"""
        if isinstance(location, RepositoryCoordinate):
            return location.with_version(version)
        return location

    def fetch(self, context: DeployContext) -> Path:
        """
        Place the artifact at ``context.cached_artifact_path``

        Returns:
            Path of the cached artifact

        Raises:
            RetrievalError: On transfer or checksum failure
        """
        location = context.location
        self.resolve_filename(location)

        destination = context.cached_artifact_path
        logger.info(f"Retrieving {location} into {destination}")

        return run_async(self._fetch(location, destination, context.artifact.checksum))

    async def _fetch(self, location: Location, destination: Path, checksum: Optional[str]) -> Path:
        async with self.source_for(location) as source:
            return await source.fetch(location, destination, checksum)

    async def _resolve_latest(self, location: Location) -> str:
        async with self.source_for(location) as source:
            return await source.resolve_version(location)
