"""Deployment orchestrator: runs one deployment from start to finish"""

import logging
from typing import Optional

from ..constants import DEFAULT_DIRECTORY_MODE, MSG_DEPLOY_SKIPPED, MSG_DEPLOY_SUCCESS
from ..models.release import DeployContext, DeployDecision
from ..models.result import DeployResult, OperationStatus
from ..plugins.base import HookPoint, HookRegistry
from .decider import DeploymentDecider
from .host import Host, LocalHost
from .materializer import Materializer
from .release_store import ReleaseStore
from .retrieval import RetrievalStrategy

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Sequences retention, decision, retrieval, hooks and cutover

    The run never rolls back: a failing step raises and leaves whatever
    the earlier steps did on disk. Every step is safe to repeat, so the
    remedy for a failure is running the deployment again.
    """

    def __init__(self,
                 store: ReleaseStore,
                 retrieval: RetrievalStrategy,
                 hooks: Optional[HookRegistry] = None,
                 host: Optional[Host] = None,
                 materializer: Optional[Materializer] = None,
                 decider: Optional[DeploymentDecider] = None):
        self.store = store
        self.retrieval = retrieval
        self.hooks = hooks or HookRegistry()
        self.host = host or LocalHost()
        self.materializer = materializer or Materializer(self.host)
        self.decider = decider or DeploymentDecider(store)

    def run(self, context: DeployContext) -> DeployResult:
        """
        Deploy ``context.version`` of ``context.name``

        Returns:
            DeployResult describing what was done

        Raises:
            ArtifactDeployError: Any failure; the run stops at the failing step
        """
        result = DeployResult(
            status=OperationStatus.IN_PROGRESS,
            name=context.name,
            version=context.version,
            release_path=context.release_path,
            previous_version=self.store.current_version()
        )

        logger.info(f"Deploying {context.name} {context.version} to {context.deploy_to}")

        result.pruned_versions = self.store.prune(context.keep)
        self.prepare_directories(context)

        decision = self.decider.decide(context)
        deploy = decision.deploy
        result.decision = decision.branch.value
        result.changed_files = list(decision.changed_files)

        result.artifact_path = self.retrieval.fetch(context)

        self._hook(HookPoint.BEFORE_DEPLOY, context, deploy, result)

        if deploy:
            self._hook(HookPoint.BEFORE_EXTRACT, context, deploy, result)
            self.materializer.materialize(context, result.artifact_path)
            self._hook(HookPoint.AFTER_EXTRACT, context, deploy, result)

            self._hook(HookPoint.BEFORE_SYMLINK, context, deploy, result)
            self.link_shared(context)
            self._hook(HookPoint.AFTER_SYMLINK, context, deploy, result)

        self._hook(HookPoint.CONFIGURE, context, deploy, result)

        if deploy and context.should_migrate:
            self._hook(HookPoint.BEFORE_MIGRATE, context, deploy, result)
            self._hook(HookPoint.MIGRATE, context, deploy, result)
            self._hook(HookPoint.AFTER_MIGRATE, context, deploy, result)

        if deploy or self._drifted(context, decision):
            self._hook(HookPoint.RESTART, context, deploy, result)

        self._hook(HookPoint.AFTER_DEPLOY, context, deploy, result)

        self.store.promote(context.version)

        if deploy:
            self.store.write_manifest(context.version)
            result.deployed = True
            result.message = MSG_DEPLOY_SUCCESS.format(name=context.name, version=context.version)
            result.complete(OperationStatus.SUCCESS)
        else:
            result.message = MSG_DEPLOY_SKIPPED.format(name=context.name, version=context.version)
            result.complete(OperationStatus.SKIPPED)

        logger.info(result.message)
        return result

    def prepare_directories(self, context: DeployContext) -> None:
        """Create cache, release and shared directories"""
        paths = [context.version_container_path, context.release_path, context.shared_path]
        paths.extend(context.shared_path / name for name in context.shared_directories)

        for path in paths:
            self.host.ensure_directory(path, context.owner, context.group, DEFAULT_DIRECTORY_MODE)

    def link_shared(self, context: DeployContext) -> None:
        """Link release paths to their shared counterparts

        For each ``symlinks`` entry ``key: value``, ``release/value`` becomes
        a link to the directory ``shared/key``.
        """
        for key, value in context.symlinks.items():
            shared = context.shared_path / key
            self.host.ensure_directory(shared, context.owner, context.group, DEFAULT_DIRECTORY_MODE)
            self.host.ensure_symlink(context.release_path / value, shared, context.owner, context.group)

    def _drifted(self, context: DeployContext, decision: DeployDecision) -> bool:
        if decision.deploy or not self.store.has_manifest(context.version):
            return decision.deploy
        return self.decider.has_drifted(context.version)

    def _hook(self, hook: HookPoint, context: DeployContext, must_deploy: bool, result: DeployResult) -> None:
        if self.hooks.invoke(hook, context, must_deploy):
            result.hooks_run.append(hook.value)
