# artifact_deploy/utils/__init__.py
"""Utility functions for artifact-deploy"""

from .file_utils import (
    copy_with_progress,
    remove_path,
    extract_archive,
    atomic_write,
    replace_symlink,
)

from .hash_utils import (
    calculate_file_hash,
    calculate_file_hash_async,
    checksums_match,
)

from .async_utils import run_async

__all__ = [
    # File utilities
    'copy_with_progress',
    'remove_path',
    'extract_archive',
    'atomic_write',
    'replace_symlink',

    # Hash utilities
    'calculate_file_hash',
    'calculate_file_hash_async',
    'checksums_match',

    # Async utilities
    'run_async',
]
