# artifact_deploy/utils/file_utils.py
"""File operation utilities"""

import os
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import Optional, Callable, Union

from ..constants import DEFAULT_CHUNK_SIZE, TEMP_LINK_SUFFIX

TAR_FORMATS = ("gztar", "bztar", "xztar", "tar")


def copy_with_progress(src: Path,
                       dst: Path,
                       callback: Optional[Callable[[int, int], None]] = None,
                       chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
    """
    Copy file with progress callback

    Args:
        src: Source file
        dst: Destination file
        callback: Progress callback(bytes_copied, total_bytes)
        chunk_size: Copy chunk size
    """
    total_size = src.stat().st_size
    bytes_copied = 0

    dst.parent.mkdir(parents=True, exist_ok=True)

    with open(src, 'rb') as fsrc:
        with open(dst, 'wb') as fdst:
            while chunk := fsrc.read(chunk_size):
                fdst.write(chunk)
                bytes_copied += len(chunk)

                if callback:
                    callback(bytes_copied, total_size)

    shutil.copystat(src, dst)


def remove_path(path: Path) -> bool:
    """
    Remove file, symlink or directory tree

    Args:
        path: Path to remove

    Returns:
        True if something was removed
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def extract_archive(archive_path: Path,
                    extract_to: Path,
                    format: Optional[str] = None) -> Path:
    """
    Extract archive

    Tar members are passed through tarfile's "data" filter, so members
    escaping ``extract_to`` (absolute links, ``..`` paths, device files) are
    rejected. Zip members with ``..`` components are skipped by shutil.

    Args:
        archive_path: Archive file path
        extract_to: Extraction directory
        format: shutil archive format (auto-detect if None)

    Returns:
        Path to extracted content

    Raises:
        tarfile.FilterError: If a tar member would land outside ``extract_to``
        shutil.ReadError: If the archive cannot be read
    """
    extract_to.mkdir(parents=True, exist_ok=True)

    if format in TAR_FORMATS or (format is None and tarfile.is_tarfile(archive_path)):
        with tarfile.open(archive_path, "r:*") as tar:
            tar.extractall(extract_to, filter="data")
        return extract_to

    shutil.unpack_archive(
        filename=str(archive_path),
        extract_dir=str(extract_to),
        format=format
    )

    return extract_to


def atomic_write(file_path: Path,
                 content: Union[str, bytes],
                 mode: str = 'w') -> None:
    """
    Write file atomically

    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode
    """
    temp_fd, temp_path = tempfile.mkstemp(dir=file_path.parent)

    try:
        with os.fdopen(temp_fd, mode) as f:
            f.write(content)

        os.replace(temp_path, file_path)

    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def replace_symlink(link_path: Path, target: Union[str, Path]) -> Path:
    """
    Atomically point a symlink at a new target

    A temporary link is created next to the live one and renamed over it,
    so observers always see either the old or the new target.

    Args:
        link_path: Symlink to create or update
        target: Link target

    Returns:
        Path to the link
    """
    temp_link = link_path.with_name(link_path.name + TEMP_LINK_SUFFIX)

    if temp_link.exists() or temp_link.is_symlink():
        temp_link.unlink()

    temp_link.symlink_to(target, target_is_directory=True)
    os.replace(temp_link, link_path)

    return link_path
