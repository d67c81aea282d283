"""Artifact source factory"""

from typing import Dict, Any, Type

from .base import ArtifactSource
from .filesystem import LocalSource
from .http import HttpSource
from .repository import RepositorySource
from ..constants import LocationType
from ..models.artifact import Location
from ..models.config import DeployConfig


class SourceFactory:
    """Factory for creating artifact source instances"""

    # Registry of artifact sources
    _sources: Dict[LocationType, Type[ArtifactSource]] = {
        LocationType.HTTP: HttpSource,
        LocationType.REPOSITORY: RepositorySource,
        LocationType.LOCAL: LocalSource,
    }

    @classmethod
    def create_for_location(cls,
                            location: Location,
                            config: DeployConfig,
                            overrides: Dict[str, Any] = None) -> ArtifactSource:
        """Create the source that serves a classified location

        Args:
            location: Classified artifact location
            config: Deploy configuration
            overrides: Extra options merged last (e.g. a test transport)

        Returns:
            Artifact source instance

        Raises:
            ValueError: If the location type is not supported
        """
        location_type = location.location_type

        if location_type not in cls._sources:
            raise ValueError(f"Unsupported location type: {location_type.value}")

        source_config: Dict[str, Any] = {
            "checksum_algorithm": config.checksum_algorithm,
        }

        if location_type == LocationType.HTTP:
            source_config.update({
                "timeout": config.http.timeout,
                "headers": dict(config.http.headers),
            })

        elif location_type == LocationType.REPOSITORY:
            source_config.update({
                "url": config.repository.url,
                "repository": config.repository.repository,
                "username": config.repository.username,
                "password": config.repository.password,
                "timeout": config.repository.timeout,
            })

        if overrides:
            source_config.update(overrides)

        source_class = cls._sources[location_type]
        return source_class(source_config)

    @classmethod
    def register_source(cls, location_type: LocationType, source_class: Type[ArtifactSource]):
        """Register a source for a location type

        Args:
            location_type: Location type enum
            source_class: Source class
        """
        cls._sources[location_type] = source_class

    @classmethod
    def get_supported_types(cls) -> list:
        return [lt.value for lt in cls._sources.keys()]
