# artifact_deploy/models/artifact.py
"""Artifact specification and location models"""

import os
import posixpath
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote

from ..api.exceptions import UnresolvableLocation
from ..constants import (
    DEFAULT_EXTENSION,
    HTTP_SCHEMES,
    LATEST_VERSION,
    LocationType,
)


def is_latest(version: str) -> bool:
    """Check for the 'latest' sentinel (case-insensitive)"""
    return version.strip().lower() == LATEST_VERSION


@dataclass(frozen=True)
class ArtifactSpec:
    """Requested artifact: where it lives and which version to install"""
    location: str
    version: str
    checksum: Optional[str] = None


@dataclass(frozen=True)
class Location:
    """Base class of the classified artifact locations"""

    @property
    def location_type(self) -> LocationType:
        raise NotImplementedError

    @property
    def filename(self) -> str:
        """Name of the file this location produces in the cache"""
        raise NotImplementedError


@dataclass(frozen=True)
class HttpLocation(Location):
    """Direct download over http(s)"""
    url: str

    @property
    def location_type(self) -> LocationType:
        return LocationType.HTTP

    @property
    def filename(self) -> str:
        return posixpath.basename(unquote(urlparse(self.url).path))

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class RepositoryCoordinate(Location):
    """Binary repository coordinate (group:artifact:version[:extension])"""
    group_id: str
    artifact_id: str
    version: str
    extension: str = DEFAULT_EXTENSION

    @property
    def location_type(self) -> LocationType:
        return LocationType.REPOSITORY

    @property
    def filename(self) -> str:
        return f"{self.artifact_id}-{self.version}.{self.extension}"

    @property
    def group_path(self) -> str:
        """Group id in repository path form (com.foo -> com/foo)"""
        return self.group_id.replace('.', '/')

    def with_version(self, version: str) -> 'RepositoryCoordinate':
        """Copy of this coordinate pinned to another version"""
        return replace(self, version=version)

    def __str__(self) -> str:
        return ":".join([self.group_id, self.artifact_id, self.version, self.extension])


@dataclass(frozen=True)
class LocalPath(Location):
    """File on the local filesystem"""
    path: str

    @property
    def location_type(self) -> LocationType:
        return LocationType.LOCAL

    @property
    def filename(self) -> str:
        return os.path.basename(self.path.rstrip(os.sep))

    def __str__(self) -> str:
        return self.path


def _parse_http(raw: str) -> Optional[HttpLocation]:
    parsed = urlparse(raw)
    if parsed.scheme.lower() in HTTP_SCHEMES and parsed.netloc:
        return HttpLocation(url=raw)
    return None


def _parse_coordinate(raw: str) -> Optional[RepositoryCoordinate]:
    parts = raw.split(':')
    if len(parts) < 3 or len(parts) > 4 or not all(p.strip() for p in parts):
        return None

    group_id, artifact_id, version = (p.strip() for p in parts[:3])
    extension = parts[3].strip() if len(parts) == 4 else DEFAULT_EXTENSION

    return RepositoryCoordinate(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        extension=extension
    )


def classify_location(raw: str) -> Location:
    """
    Classify an artifact location string

    Order is fixed: an http(s) URL, then a repository coordinate, then an
    existing local path. A coordinate that is also a valid path stays a
    coordinate.

    Args:
        raw: Location string as configured

    Returns:
        HttpLocation, RepositoryCoordinate or LocalPath

    Raises:
        UnresolvableLocation: If the string matches none of the forms
    """
    raw = (raw or "").strip()
    if not raw:
        raise UnresolvableLocation(raw)

    location = _parse_http(raw) or _parse_coordinate(raw)
    if location is not None:
        return location

    if Path(raw).expanduser().exists():
        return LocalPath(path=str(Path(raw).expanduser()))

    raise UnresolvableLocation(raw)
