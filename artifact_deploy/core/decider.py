"""Decides whether a deployment run has to (re)materialize a release"""

import logging
from typing import List, Optional

from ..models.release import Decision, DeployContext, DeployDecision
from .manifest_engine import ManifestEngine
from .release_store import ReleaseStore

logger = logging.getLogger(__name__)


class DeploymentDecider:
    """Four-branch deploy decision

    Branches are checked in order:

    1. nothing is current: first install
    2. a version never deployed (or already pruned): fresh install
    3. a retained previous version: deploy only if its files drifted
    4. the current version: deploy only if its files drifted
    """

    def __init__(self, store: ReleaseStore, manifest_engine: Optional[ManifestEngine] = None):
        self.store = store
        self.manifest_engine = manifest_engine or ManifestEngine()

    def decide(self, context: DeployContext) -> DeployDecision:
        """Compute the deploy decision for the run's resolved version

        A retained, non-current release without a saved manifest is treated
        as not installed (NEW_VERSION) rather than raising, so a run that
        failed before writing its manifest is redeployed.

        Args:
            context: Deployment context; ``force`` overrides the outcome

        Returns:
            DeployDecision with the branch taken

        Raises:
            ManifestReadError: If a saved manifest is needed but unreadable
        """
        name, version = context.name, context.version
        decision = self._evaluate(name, version)

        if context.force:
            logger.info(f"Forced deployment of {name} {version}.")
            return DeployDecision(
                branch=decision.branch,
                must_deploy=True,
                changed_files=decision.changed_files,
                forced=True
            )

        return decision

    def _evaluate(self, name: str, version: str) -> DeployDecision:
        current = self.store.current_version()

        if current is None:
            logger.info(f"No current version installed for {name}.")
            logger.info(f"Installing version, {version} for {name}.")
            return DeployDecision(Decision.FIRST_INSTALL, True)

        previous = self.store.list_previous_versions()
        retained = version in previous

        if retained and not self.store.has_manifest(version):
            # Directory left by a run that never finished
            logger.warning(f"Release {version} of {name} has no manifest, treating it as not installed.")
            retained = False

        if version != current and not retained:
            logger.info(f"Currently installed version of artifact is {current}.")
            logger.info(f"Version {version} for {name} has not already been installed.")
            logger.info(f"Installing version, {version} for {name}.")
            return DeployDecision(Decision.NEW_VERSION, True)

        if version != current:
            logger.info(f"Version {version} of artifact has already been installed.")
            branch = Decision.RETAINED_VERSION
        else:
            logger.info(f"Currently installed version of artifact is {version}.")
            branch = Decision.CURRENT_VERSION

        changed = self.drifted_files(version)
        return DeployDecision(branch, bool(changed), tuple(changed))

    def drifted_files(self, version: str) -> List[str]:
        """Files of a release that no longer match its saved manifest"""
        release_path = self.store.release_path(version)
        saved = self.store.read_manifest(version)
        current = self.store.scan_manifest(version)

        logger.info(
            f"Comparing saved manifest from {release_path} with regenerated manifest from {release_path}."
        )
        changed = self.manifest_engine.changed_files(saved, current)

        if changed:
            logger.info(f"Saved manifest from {release_path} differs from regenerated manifest.")
            logger.info("Deploying.")
        else:
            logger.info(f"Saved manifest from {release_path} is the same as regenerated manifest.")
            logger.info("Not Deploying.")

        return changed

    def has_drifted(self, version: str) -> bool:
        """Whether a release's files diverge from its saved manifest"""
        saved = self.store.read_manifest(version)
        current = self.store.scan_manifest(version)
        return self.manifest_engine.diff(saved, current)
