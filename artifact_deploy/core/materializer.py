"""Turns a cached artifact into the contents of a release directory"""

import logging
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import Optional

from ..api.exceptions import ConfigurationError, RetrievalError
from ..constants import ARCHIVE_FORMATS
from ..models.release import DeployContext
from ..utils.file_utils import extract_archive
from .host import Host, LocalHost

logger = logging.getLogger(__name__)


def archive_format(filename: str) -> Optional[str]:
    """shutil archive format for a file name, None if unsupported"""
    lowered = filename.lower()
    for suffix, fmt in ARCHIVE_FORMATS:
        if lowered.endswith(suffix):
            return fmt
    return None


class Materializer:
    """Extracts or copies the cached artifact into the release path"""

    def __init__(self, host: Optional[Host] = None):
        self.host = host or LocalHost()

    def materialize(self, context: DeployContext, artifact_path: Path) -> Path:
        """
        Populate ``context.release_path`` from the cached artifact

        Archives are unpacked when ``context.is_tarball`` is set, otherwise
        the file is copied as is.

        Returns:
            Release path

        Raises:
            ConfigurationError: If the archive type is not supported
            RetrievalError: If the archive is corrupt or a member would be
                written outside the release path
        """
        if context.is_tarball:
            self.extract(artifact_path, context.release_path)
        else:
            self.copy(artifact_path, context.release_path)

        self.host.apply_ownership(context.release_path, context.owner, context.group)
        return context.release_path

    def extract(self, artifact_path: Path, release_path: Path) -> Path:
        fmt = archive_format(artifact_path.name)
        if fmt is None:
            supported = ", ".join(suffix for suffix, _ in ARCHIVE_FORMATS)
            raise ConfigurationError(
                f"Cannot extract artifact because of its extension: {artifact_path.name}. "
                f"Supported types are {supported}"
            )

        logger.info(f"Extracting {artifact_path} to {release_path}")
        try:
            return extract_archive(artifact_path, release_path, format=fmt)
        except (tarfile.TarError, zipfile.BadZipFile, shutil.ReadError) as e:
            raise RetrievalError(f"Cannot extract artifact {artifact_path.name}: {e}") from e

    def copy(self, artifact_path: Path, release_path: Path) -> Path:
        release_path.mkdir(parents=True, exist_ok=True)
        target = release_path / artifact_path.name

        logger.info(f"Copying {artifact_path} to {release_path}")
        shutil.copy2(artifact_path, target)
        return target
