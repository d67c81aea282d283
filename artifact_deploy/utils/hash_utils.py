"""Hash calculation utilities"""

import hashlib
from pathlib import Path
from typing import Optional

import aiofiles

from ..constants import DEFAULT_CHECKSUM_ALGORITHM


def calculate_file_hash(file_path: Path,
                        algorithm: str = DEFAULT_CHECKSUM_ALGORITHM,
                        chunk_size: int = 8192) -> str:
    """
    Calculate file hash

    Args:
        file_path: Path to file
        algorithm: Hash algorithm (sha256, sha1, md5, ...)
        chunk_size: Read chunk size

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hash_func.update(chunk)

    return hash_func.hexdigest()


async def calculate_file_hash_async(file_path: Path,
                                    algorithm: str = DEFAULT_CHECKSUM_ALGORITHM,
                                    chunk_size: int = 8192) -> str:
    """
    Calculate file hash asynchronously

    Args:
        file_path: Path to file
        algorithm: Hash algorithm
        chunk_size: Read chunk size

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)

    async with aiofiles.open(file_path, 'rb') as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            hash_func.update(chunk)

    return hash_func.hexdigest()


def checksums_match(actual: str, expected: Optional[str]) -> bool:
    """Compare two hex digests, ignoring case and surrounding whitespace"""
    if not expected:
        return False
    return actual.strip().lower() == expected.strip().lower()
