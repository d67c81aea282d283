"""Release retention policy"""

import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)


class RetentionPolicy:
    """Keeps at most ``keep`` previous releases of an artifact"""

    def __init__(self, keep: int = 0):
        if keep < 0:
            raise ValueError(f"keep must not be negative: {keep}")
        self.keep = keep

    def select(self, previous_versions: Sequence[str]) -> List[str]:
        """Versions to delete, given previous versions oldest first"""
        total = len(previous_versions)
        if total <= self.keep:
            return []
        return list(previous_versions[:total - self.keep])

    def apply(self, store) -> List[str]:
        """Prune a release store down to the configured count

        Args:
            store: ReleaseStore to prune

        Returns:
            Versions that were removed
        """
        previous = store.list_previous_versions()
        to_delete = self.select(previous)
        if not to_delete:
            return []

        logger.info(
            f"Deleting {len(to_delete)} of {len(previous)} old versions (keeping: {self.keep})"
        )

        for version in to_delete:
            store.remove_release(version)
            logger.info(f"Version {version} deleted")

        return to_delete
