"""Release store: versioned release directories and the current pointer"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from ..api.exceptions import ReleaseStoreError
from ..constants import RELEASES_DIR, CURRENT_LINK_NAME, MSG_LINK_UPDATED
from ..models.manifest import Manifest
from ..models.release import Release
from ..utils.file_utils import remove_path, replace_symlink
from .manifest_engine import ManifestEngine
from .retention import RetentionPolicy

logger = logging.getLogger(__name__)


class ReleaseStore(ABC):
    """Owns the set of installed releases of one artifact

    Every filesystem query the decision and retention logic needs goes
    through this interface.
    """

    @abstractmethod
    def release_path(self, version: str) -> Path:
        """Directory of a release"""
        pass

    @abstractmethod
    def current_version(self) -> Optional[str]:
        """Version the current pointer targets, if any"""
        pass

    @abstractmethod
    def list_previous_versions(self) -> List[str]:
        """Non-current versions, oldest modification time first"""
        pass

    @abstractmethod
    def release_exists(self, version: str) -> bool:
        pass

    @abstractmethod
    def promote(self, version: str) -> None:
        """Atomically point the current pointer at a release"""
        pass

    @abstractmethod
    def remove_release(self, version: str) -> None:
        """Delete a release and its cached artifacts"""
        pass

    @abstractmethod
    def has_manifest(self, version: str) -> bool:
        """Whether a release finished deploying and recorded its manifest"""
        pass

    @abstractmethod
    def read_manifest(self, version: str) -> Manifest:
        """Manifest saved when the release was deployed"""
        pass

    @abstractmethod
    def scan_manifest(self, version: str) -> Manifest:
        """Manifest regenerated from the release's files"""
        pass

    @abstractmethod
    def write_manifest(self, version: str) -> Manifest:
        """Regenerate and persist the manifest of a release"""
        pass

    def prune(self, keep: int) -> List[str]:
        """Delete the oldest previous releases beyond ``keep``

        Returns:
            Versions that were removed
        """
        return RetentionPolicy(keep).apply(self)

    def get_release(self, version: str) -> Release:
        """Release record with its saved manifest"""
        return Release(
            version=version,
            path=self.release_path(version),
            manifest=self.read_manifest(version)
        )


class FileSystemReleaseStore(ReleaseStore):
    """Release store backed by the deploy directory

    Layout::

        deploy_to/
          releases/<version>/
            manifest.yaml
          current -> releases/<version>
    """

    def __init__(self,
                 deploy_to: Union[str, Path],
                 current_path: Optional[Union[str, Path]] = None,
                 cache_dir: Optional[Union[str, Path]] = None,
                 manifest_engine: Optional[ManifestEngine] = None):
        """Initialize release store

        Args:
            deploy_to: Deploy target root
            current_path: Current pointer (default: deploy_to/current)
            cache_dir: Per-artifact cache root holding <version>/ directories
            manifest_engine: Manifest engine instance
        """
        self.deploy_to = Path(deploy_to)
        self.releases_dir = self.deploy_to / RELEASES_DIR
        self.current_path = Path(current_path) if current_path else self.deploy_to / CURRENT_LINK_NAME
        self.cache_dir = Path(cache_dir) if cache_dir else None
        self.manifest_engine = manifest_engine or ManifestEngine()

    def release_path(self, version: str) -> Path:
        return self.releases_dir / version

    def manifest_path(self, version: str) -> Path:
        return self.release_path(version) / self.manifest_engine.manifest_name

    def current_release_path(self) -> Optional[Path]:
        """Target of the current pointer, if it resolves"""
        if not self.current_path.is_symlink() or not self.current_path.exists():
            return None
        return Path(os.readlink(self.current_path))

    def current_version(self) -> Optional[str]:
        target = self.current_release_path()
        if target is None:
            return None
        return target.name

    def list_previous_versions(self) -> List[str]:
        if not self.releases_dir.is_dir():
            return []

        current = self.current_version()
        candidates = [
            path for path in self.releases_dir.iterdir()
            if path.is_dir() and not path.is_symlink() and path.name != current
        ]
        candidates.sort(key=lambda p: (p.stat().st_mtime, p.name))

        return [path.name for path in candidates]

    def release_exists(self, version: str) -> bool:
        return self.release_path(version).is_dir()

    def promote(self, version: str) -> None:
        target = self.release_path(version)
        if not target.is_dir():
            raise ReleaseStoreError(f"Cannot promote missing release: {target}")

        if self.current_path.is_symlink() and Path(os.readlink(self.current_path)) == target:
            return

        self.current_path.parent.mkdir(parents=True, exist_ok=True)
        replace_symlink(self.current_path, target)
        logger.info(MSG_LINK_UPDATED.format(link=self.current_path, target=target))

    def remove_release(self, version: str) -> None:
        if version == self.current_version():
            raise ReleaseStoreError(f"Refusing to delete the current release: {version}")

        if self.cache_dir is not None:
            remove_path(self.cache_dir / version)
        remove_path(self.release_path(version))

    def has_manifest(self, version: str) -> bool:
        return self.manifest_path(version).is_file()

    def read_manifest(self, version: str) -> Manifest:
        return self.manifest_engine.load(self.manifest_path(version))

    def scan_manifest(self, version: str) -> Manifest:
        return self.manifest_engine.generate(self.release_path(version))

    def write_manifest(self, version: str) -> Manifest:
        manifest = self.scan_manifest(version)
        self.manifest_engine.save(manifest, self.manifest_path(version))
        return manifest
