"""Core functionality for artifact-deploy"""

from .manifest_engine import ManifestEngine
from .host import Host, LocalHost
from .release_store import ReleaseStore, FileSystemReleaseStore
from .retention import RetentionPolicy
from .decider import DeploymentDecider
from .retrieval import RetrievalStrategy
from .materializer import Materializer, archive_format
from .lock import DeployLock
from .orchestrator import DeploymentOrchestrator

__all__ = [
    "ManifestEngine",
    "Host",
    "LocalHost",
    "ReleaseStore",
    "FileSystemReleaseStore",
    "RetentionPolicy",
    "DeploymentDecider",
    "RetrievalStrategy",
    "Materializer",
    "archive_format",
    "DeployLock",
    "DeploymentOrchestrator",
]
