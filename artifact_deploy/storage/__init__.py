# artifact_deploy/storage/__init__.py
"""Artifact sources for artifact-deploy"""

from .base import ArtifactSource
from .filesystem import LocalSource
from .http import HttpSource
from .repository import RepositorySource
from .factory import SourceFactory

__all__ = [
    'ArtifactSource',
    'LocalSource',
    'HttpSource',
    'RepositorySource',
    'SourceFactory',
]
