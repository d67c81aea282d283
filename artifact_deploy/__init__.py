"""Artifact Deploy - versioned artifact releases with drift detection.

Retrieves an artifact over HTTP, from a Maven-style repository or from
local disk, installs it into a versioned release directory, and switches a
``current`` symlink to it. Content manifests detect drift; old releases are
pruned to a bounded history.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.deployer import Deployer, deploy

# Data models
from .models.artifact import ArtifactSpec, classify_location
from .models.config import DeployConfig
from .models.manifest import Manifest
from .models.release import Decision, DeployContext, DeployDecision
from .models.result import DeployResult, StatusResult, VerifyResult

# Engine
from .core.manifest_engine import ManifestEngine
from .core.decider import DeploymentDecider
from .core.orchestrator import DeploymentOrchestrator
from .core.release_store import ReleaseStore, FileSystemReleaseStore
from .core.retention import RetentionPolicy
from .core.retrieval import RetrievalStrategy
from .plugins.base import HookPoint, HookRegistry

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",

    # Core API functions
    "deploy",

    # Data models
    "ArtifactSpec",
    "classify_location",
    "DeployConfig",
    "Manifest",
    "Decision",
    "DeployContext",
    "DeployDecision",
    "DeployResult",
    "StatusResult",
    "VerifyResult",

    # Engine
    "ManifestEngine",
    "DeploymentDecider",
    "DeploymentOrchestrator",
    "ReleaseStore",
    "FileSystemReleaseStore",
    "RetentionPolicy",
    "RetrievalStrategy",
    "HookPoint",
    "HookRegistry",

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
