"""Manifest engine for release drift detection"""

import logging
import os
from pathlib import Path
from typing import List, Union

import yaml

from ..api.exceptions import ManifestReadError
from ..constants import MANIFEST_FILE, MANIFEST_HASH_ALGORITHM
from ..models.manifest import Manifest
from ..utils.file_utils import atomic_write
from ..utils.hash_utils import calculate_file_hash

logger = logging.getLogger(__name__)


class ManifestEngine:
    """Generates, compares and persists release content manifests"""

    def __init__(self,
                 manifest_name: str = MANIFEST_FILE,
                 algorithm: str = MANIFEST_HASH_ALGORITHM):
        """Initialize manifest engine

        Args:
            manifest_name: File name of the manifest inside a release
            algorithm: Hash algorithm applied to file contents
        """
        self.manifest_name = manifest_name
        self.algorithm = algorithm

    def generate(self, directory: Union[str, Path]) -> Manifest:
        """Hash every regular file below a directory

        Directory entries and the release's own manifest file are skipped.
        Keys are POSIX paths relative to ``directory``, so the result does
        not depend on where the tree lives or the order it is walked in.

        Args:
            directory: Release directory to scan

        Returns:
            Manifest of the directory contents
        """
        directory = Path(directory)
        logger.info(f"Generating manifest for files in {directory}")

        files = {}
        if not directory.is_dir():
            return Manifest(files=files)

        manifest_path = directory / self.manifest_name

        for root, dirs, filenames in os.walk(directory, followlinks=False):
            dirs.sort()
            for filename in sorted(filenames):
                file_path = Path(root) / filename
                if file_path == manifest_path or not file_path.is_file():
                    continue

                relative = file_path.relative_to(directory).as_posix()
                files[relative] = calculate_file_hash(file_path, self.algorithm)

        return Manifest(files=files)

    @staticmethod
    def changed_files(saved: Manifest, current: Manifest) -> List[str]:
        """Entries of ``saved`` that are missing from or differ in ``current``

        Files present only in ``current`` are not reported.
        """
        return sorted(
            path for path, checksum in saved.items()
            if path not in current or current[path] != checksum
        )

    @classmethod
    def diff(cls, saved: Manifest, current: Manifest) -> bool:
        """Check whether ``current`` diverges from ``saved``

        Args:
            saved: Manifest recorded at deploy time
            current: Manifest regenerated from disk

        Returns:
            True if any saved entry is missing or has a different hash
        """
        return any(
            path not in current or current[path] != checksum
            for path, checksum in saved.items()
        )

    def load(self, path: Union[str, Path]) -> Manifest:
        """Load a persisted manifest

        Args:
            path: Path to manifest.yaml

        Returns:
            Loaded manifest

        Raises:
            ManifestReadError: If the file is missing or malformed
        """
        path = Path(path)
        logger.info(f"Loading {self.manifest_name} file from directory: {path.parent}")

        if not path.is_file():
            raise ManifestReadError(f"Manifest file not found: {path}")

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ManifestReadError(f"Failed to read manifest {path}: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ManifestReadError(f"Malformed manifest {path}: expected a mapping of path to hash")

        return Manifest.from_dict(data)

    def save(self, manifest: Manifest, path: Union[str, Path]) -> Path:
        """Write a manifest, replacing any existing file

        Args:
            manifest: Manifest to save
            path: Destination path

        Returns:
            Path to saved manifest file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Writing {self.manifest_name} file to {path}")
        content = yaml.safe_dump(manifest.to_dict(), default_flow_style=False, sort_keys=True)
        atomic_write(path, content)

        return path
