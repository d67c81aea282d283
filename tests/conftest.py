"""Shared test fixtures for artifact-deploy."""

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from artifact_deploy.api.exceptions import ManifestReadError, ReleaseStoreError
from artifact_deploy.core.manifest_engine import ManifestEngine
from artifact_deploy.core.release_store import ReleaseStore
from artifact_deploy.models.artifact import ArtifactSpec, LocalPath
from artifact_deploy.models.config import DeployConfig
from artifact_deploy.models.manifest import Manifest
from artifact_deploy.models.release import DeployContext
from artifact_deploy.plugins.base import HookContext, HookPoint, HookRegistry


class InMemoryReleaseStore(ReleaseStore):
    """Release store keeping releases as dictionaries

    ``files`` holds the live contents of each release, ``saved`` the
    manifest recorded when it was deployed. Insertion order stands in for
    modification time.
    """

    def __init__(self, root: Path = Path("/srv/app")):
        self.root = root
        self.files: Dict[str, Dict[str, str]] = {}
        self.saved: Dict[str, Manifest] = {}
        self.current: Optional[str] = None
        self.removed: List[str] = []

    def add_release(self, version: str, files: Dict[str, str], saved: bool = True) -> None:
        self.files.pop(version, None)
        self.files[version] = dict(files)
        if saved:
            self.saved[version] = Manifest(files=dict(files))

    def release_path(self, version: str) -> Path:
        return self.root / "releases" / version

    def current_version(self) -> Optional[str]:
        return self.current

    def list_previous_versions(self) -> List[str]:
        return [v for v in self.files if v != self.current]

    def release_exists(self, version: str) -> bool:
        return version in self.files

    def promote(self, version: str) -> None:
        if version not in self.files:
            raise ReleaseStoreError(f"Cannot promote missing release: {version}")
        self.current = version

    def remove_release(self, version: str) -> None:
        if version == self.current:
            raise ReleaseStoreError(f"Refusing to delete the current release: {version}")
        self.files.pop(version, None)
        self.saved.pop(version, None)
        self.removed.append(version)

    def has_manifest(self, version: str) -> bool:
        return version in self.saved

    def read_manifest(self, version: str) -> Manifest:
        if version not in self.saved:
            raise ManifestReadError(f"Manifest file not found for {version}")
        return self.saved[version]

    def scan_manifest(self, version: str) -> Manifest:
        return Manifest(files=dict(self.files.get(version, {})))

    def write_manifest(self, version: str) -> Manifest:
        manifest = self.scan_manifest(version)
        self.saved[version] = manifest
        return manifest


class RecordingHooks(HookRegistry):
    """Hook registry recording every slot it is asked to run"""

    def __init__(self):
        super().__init__()
        self.calls: List[HookContext] = []
        for hook_point in HookPoint:
            self.register(hook_point, self.calls.append)

    @property
    def names(self) -> List[str]:
        return [call.hook.value for call in self.calls]


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def memory_store() -> InMemoryReleaseStore:
    """Provide an empty in-memory release store."""
    return InMemoryReleaseStore()


@pytest.fixture
def recording_hooks() -> RecordingHooks:
    """Provide a hook registry that records every slot."""
    return RecordingHooks()


@pytest.fixture
def manifest_engine() -> ManifestEngine:
    return ManifestEngine()


@pytest.fixture
def deploy_to(tmp_dir: Path) -> Path:
    """Deploy target root (not created)."""
    return tmp_dir / "srv" / "app"


@pytest.fixture
def cache_root(tmp_dir: Path) -> Path:
    return tmp_dir / "cache"


@pytest.fixture
def make_tarball(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a .tar.gz artifact from a name -> bytes mapping."""

    def _factory(files: Dict[str, bytes], name: str = "app-1.0.0.tar.gz") -> Path:
        artifacts = tmp_dir / "artifacts"
        artifacts.mkdir(parents=True, exist_ok=True)
        path = artifacts / name
        with tarfile.open(path, "w:gz") as tar:
            for member, data in files.items():
                info = tarfile.TarInfo(member)
                info.size = len(data)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
        return path

    return _factory


@pytest.fixture
def make_zip(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a zip based artifact."""

    def _factory(files: Dict[str, bytes], name: str = "app-1.0.0.zip") -> Path:
        artifacts = tmp_dir / "artifacts"
        artifacts.mkdir(parents=True, exist_ok=True)
        path = artifacts / name
        with zipfile.ZipFile(path, "w") as archive:
            for member, data in files.items():
                archive.writestr(member, data)
        return path

    return _factory


@pytest.fixture
def make_config(deploy_to: Path, cache_root: Path) -> Callable[..., DeployConfig]:
    """Factory fixture: build a DeployConfig with sensible defaults."""

    def _factory(artifact_location: str, version: str = "1.0.0", **overrides) -> DeployConfig:
        data = {
            "name": "app",
            "artifact_location": artifact_location,
            "version": version,
            "deploy_to": str(deploy_to),
            "cache_root": str(cache_root),
        }
        data.update(overrides)
        return DeployConfig.from_dict(data)

    return _factory


@pytest.fixture
def make_context(tmp_dir: Path) -> Callable[..., DeployContext]:
    """Factory fixture: build a DeployContext for a local artifact."""

    def _factory(version: str = "1.0.0", force: bool = False, **overrides) -> DeployContext:
        deploy_to = tmp_dir / "srv" / "app"
        artifact = tmp_dir / "artifacts" / f"app-{version}.tar.gz"
        values = dict(
            name="app",
            artifact=ArtifactSpec(location=str(artifact), version=version),
            location=LocalPath(path=str(artifact)),
            version=version,
            deploy_to=deploy_to,
            release_path=deploy_to / "releases" / version,
            current_path=deploy_to / "current",
            shared_path=deploy_to / "shared",
            cache_dir=tmp_dir / "cache" / "app",
            force=force,
        )
        values.update(overrides)
        return DeployContext(**values)

    return _factory
