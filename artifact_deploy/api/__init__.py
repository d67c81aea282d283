# artifact_deploy/api/__init__.py
"""API layer for artifact-deploy"""

from .exceptions import (
    ArtifactDeployError,
    ConfigurationError,
    UnresolvableLocation,
    RetrievalError,
    ChecksumMismatch,
    SourceNotFoundError,
    ManifestReadError,
    HookError,
    ReleaseStoreError,
    DeployLockedError,
)
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy",

    # Exceptions
    "ArtifactDeployError",
    "ConfigurationError",
    "UnresolvableLocation",
    "RetrievalError",
    "ChecksumMismatch",
    "SourceNotFoundError",
    "ManifestReadError",
    "HookError",
    "ReleaseStoreError",
    "DeployLockedError",
]
