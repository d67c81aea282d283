"""Data models for artifact-deploy"""

from .artifact import (
    ArtifactSpec,
    Location,
    HttpLocation,
    RepositoryCoordinate,
    LocalPath,
    classify_location,
    is_latest,
)
from .manifest import Manifest
from .release import Release, Decision, DeployDecision, DeployContext
from .config import DeployConfig, RepositoryConfig, HttpConfig
from .result import OperationStatus, Result, DeployResult, VerifyResult, StatusResult

__all__ = [
    # Artifact models
    "ArtifactSpec",
    "Location",
    "HttpLocation",
    "RepositoryCoordinate",
    "LocalPath",
    "classify_location",
    "is_latest",

    # Manifest models
    "Manifest",

    # Release models
    "Release",
    "Decision",
    "DeployDecision",
    "DeployContext",

    # Config models
    "DeployConfig",
    "RepositoryConfig",
    "HttpConfig",

    # Result models
    "OperationStatus",
    "Result",
    "DeployResult",
    "VerifyResult",
    "StatusResult",
]
