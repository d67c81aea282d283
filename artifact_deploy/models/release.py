# artifact_deploy/models/release.py
"""Release and deployment context models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..constants import DEFAULT_CHECKSUM_ALGORITHM, DEFAULT_KEEP, MANIFEST_FILE
from .artifact import ArtifactSpec, Location
from .manifest import Manifest


@dataclass
class Release:
    """One installed version of an artifact"""
    version: str
    path: Path
    manifest: Optional[Manifest] = None


class Decision(Enum):
    """Branch taken by the deploy decision"""
    FIRST_INSTALL = "first_install"
    NEW_VERSION = "new_version"
    RETAINED_VERSION = "retained_version"
    CURRENT_VERSION = "current_version"


@dataclass(frozen=True)
class DeployDecision:
    """Outcome of the deploy decision for one run"""
    branch: Decision
    must_deploy: bool
    changed_files: Tuple[str, ...] = ()
    forced: bool = False

    @property
    def deploy(self) -> bool:
        """Whether the release is (re)materialized in this run"""
        return self.must_deploy or self.forced


@dataclass(frozen=True)
class DeployContext:
    """Everything derived for one deployment run

    Built once before the run starts and handed to every component;
    nothing in it changes while the run is in progress.
    """
    name: str
    artifact: ArtifactSpec
    location: Location
    version: str
    deploy_to: Path
    release_path: Path
    current_path: Path
    shared_path: Path
    cache_dir: Path
    owner: Optional[str] = None
    group: Optional[str] = None
    keep: int = DEFAULT_KEEP
    force: bool = False
    is_tarball: bool = True
    should_migrate: bool = False
    symlinks: Dict[str, str] = field(default_factory=dict)
    shared_directories: Tuple[str, ...] = ()
    checksum_algorithm: str = DEFAULT_CHECKSUM_ALGORITHM

    @property
    def version_container_path(self) -> Path:
        """Cache directory for this version's retrieved files"""
        return self.cache_dir / self.version

    @property
    def cached_artifact_path(self) -> Path:
        """Where the retrieved artifact is kept"""
        return self.version_container_path / self.location.filename

    @property
    def manifest_file(self) -> Path:
        return self.release_path / MANIFEST_FILE

    def hook_environment(self) -> Dict[str, str]:
        """Environment variables exposed to command hooks"""
        return {
            "NAME": self.name,
            "VERSION": self.version,
            "RELEASE_PATH": str(self.release_path),
            "CURRENT_PATH": str(self.current_path),
            "SHARED_PATH": str(self.shared_path),
            "DEPLOY_TO": str(self.deploy_to),
            "ARTIFACT_PATH": str(self.cached_artifact_path),
        }

    def describe(self) -> List[Tuple[str, str]]:
        """Label/value pairs for display"""
        return [
            ("Name", self.name),
            ("Version", self.version),
            ("Location", str(self.location)),
            ("Release", str(self.release_path)),
            ("Current", str(self.current_path)),
        ]
