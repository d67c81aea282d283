"""Deployer API for deployment operations"""

import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Dict, List, Optional, Any, Union

from ..constants import DEPLOY_LOCK_FILE
from ..core.decider import DeploymentDecider
from ..core.host import Host, LocalHost
from ..core.lock import DeployLock
from ..core.manifest_engine import ManifestEngine
from ..core.orchestrator import DeploymentOrchestrator
from ..core.release_store import FileSystemReleaseStore
from ..core.retrieval import RetrievalStrategy
from ..models.artifact import ArtifactSpec
from ..models.config import DeployConfig
from ..models.release import DeployContext
from ..models.result import DeployResult, OperationStatus, StatusResult, VerifyResult
from ..plugins.base import HookRegistry
from ..plugins.builtin.hooks import register_command_hooks
from ..services.config_service import ConfigService
from .exceptions import ReleaseStoreError

logger = logging.getLogger(__name__)


class Deployer:
    """Deployer class for deployment operations"""

    def __init__(self,
                 config: DeployConfig,
                 host: Optional[Host] = None,
                 hooks: Optional[HookRegistry] = None,
                 source_options: Optional[Dict[str, Any]] = None):
        """
        Initialize deployer

        Args:
            config: Deployment configuration
            host: Host capabilities (default: this machine)
            hooks: Hook registry; configured command hooks are added to it
            source_options: Extra options for artifact sources
        """
        self.config = config
        self.host = host or LocalHost()
        self.hooks = register_command_hooks(
            hooks or HookRegistry(),
            config.hooks,
            self.host,
            config.owner,
            config.group
        )
        self.manifest_engine = ManifestEngine()
        self.retrieval = RetrievalStrategy(config, source_options)
        self.store = FileSystemReleaseStore(
            deploy_to=config.deploy_to,
            current_path=config.get_current_path(),
            cache_dir=self.cache_dir,
            manifest_engine=self.manifest_engine
        )
        self.decider = DeploymentDecider(self.store, self.manifest_engine)

    @classmethod
    def from_config_file(cls,
                         config_path: Optional[Union[str, Path]] = None,
                         overrides: Optional[Dict[str, Any]] = None,
                         **kwargs) -> 'Deployer':
        """Create a deployer from a YAML configuration file"""
        config = ConfigService(config_path).load_config(overrides)
        return cls(config, **kwargs)

    @property
    def cache_dir(self) -> Path:
        """Cache directory of this artifact (one subdirectory per version)"""
        return self.config.get_cache_root() / self.config.name

    def build_context(self) -> DeployContext:
        """
        Resolve location and version into the context of one run

        Raises:
            ConfigurationError: If the location or version cannot be resolved
            RetrievalError: If resolving 'latest' fails
        """
        spec = ArtifactSpec(
            location=self.config.artifact_location,
            version=self.config.version,
            checksum=self.config.checksum
        )

        location = self.retrieval.classify(spec)
        version = self.retrieval.resolve_version(spec, location)
        location = self.retrieval.pin(location, version)

        return DeployContext(
            name=self.config.name,
            artifact=spec,
            location=location,
            version=version,
            deploy_to=Path(self.config.deploy_to),
            release_path=self.store.release_path(version),
            current_path=self.config.get_current_path(),
            shared_path=self.config.get_shared_path(),
            cache_dir=self.cache_dir,
            owner=self.config.owner,
            group=self.config.group,
            keep=self.config.keep,
            force=self.config.force,
            is_tarball=self.config.is_tarball,
            should_migrate=self.config.should_migrate,
            symlinks=dict(self.config.symlinks),
            shared_directories=tuple(self.config.shared_directories),
            checksum_algorithm=self.config.checksum_algorithm
        )

    def lock(self):
        """Exclusive lock on the deploy target, or a no-op when disabled"""
        if not self.config.lock:
            return nullcontext()
        return DeployLock(Path(self.config.deploy_to) / DEPLOY_LOCK_FILE, timeout=self.config.lock_timeout)

    def deploy(self) -> DeployResult:
        """
        Run one deployment

        Returns:
            DeployResult: Deployment result

        Raises:
            ArtifactDeployError: If any step fails
        """
        context = self.build_context()

        orchestrator = DeploymentOrchestrator(
            store=self.store,
            retrieval=self.retrieval,
            hooks=self.hooks,
            host=self.host,
            decider=self.decider
        )

        with self.lock():
            return orchestrator.run(context)

    def status(self) -> StatusResult:
        """Current release, retained releases and drift of the current one"""
        result = StatusResult(
            status=OperationStatus.IN_PROGRESS,
            name=self.config.name,
            current_path=self.store.current_path
        )

        result.current_version = self.store.current_version()
        result.previous_versions = self.store.list_previous_versions()

        if result.current_version is not None:
            if self.store.has_manifest(result.current_version):
                result.changed_files = self.decider.drifted_files(result.current_version)
            else:
                result.add_warning(f"Release {result.current_version} has no saved manifest")

        result.complete(OperationStatus.SUCCESS)
        return result

    def verify(self, version: Optional[str] = None) -> VerifyResult:
        """
        Compare a release's files with its saved manifest

        Args:
            version: Release to check (default: the current release)

        Raises:
            ReleaseStoreError: If there is no such release
            ManifestReadError: If the saved manifest is unreadable
        """
        version = version or self.store.current_version()
        if version is None:
            raise ReleaseStoreError(f"No current release of {self.config.name}")
        if not self.store.release_exists(version):
            raise ReleaseStoreError(f"Release not found: {self.store.release_path(version)}")

        result = VerifyResult(
            status=OperationStatus.IN_PROGRESS,
            version=version,
            release_path=self.store.release_path(version)
        )
        result.changed_files = self.decider.drifted_files(version)

        result.complete(OperationStatus.FAILED if result.drifted else OperationStatus.SUCCESS)
        return result

    def prune(self, keep: Optional[int] = None) -> List[str]:
        """Apply retention only

        Returns:
            Versions that were removed
        """
        keep = self.config.keep if keep is None else keep
        with self.lock():
            return self.store.prune(keep)


def deploy(config_path: Optional[Union[str, Path]] = None, **overrides) -> DeployResult:
    """
    Deploy an artifact

    This is a convenience function that loads the configuration, creates a
    Deployer instance and performs the deployment.

    Args:
        config_path: Configuration file (optional)
        **overrides: Configuration values replacing file values

    Returns:
        DeployResult: Deployment result

    Raises:
        ArtifactDeployError: If deployment fails
    """
    deployer = Deployer.from_config_file(config_path, overrides)
    return deployer.deploy()
