"""End-to-end tests for DeploymentOrchestrator driven through the Deployer."""

import os
from pathlib import Path

import pytest

from artifact_deploy.api.deployer import Deployer
from artifact_deploy.api.exceptions import ConfigurationError, DeployLockedError, HookError, RetrievalError
from artifact_deploy.core.lock import DeployLock
from artifact_deploy.models.result import OperationStatus
from artifact_deploy.plugins.base import HookPoint

V1_FILES = {"bin/app": b"#!/bin/sh\necho v1\n", "conf/app.yml": b"level: info\n"}
V2_FILES = {"bin/app": b"#!/bin/sh\necho v2\n", "conf/app.yml": b"level: debug\n"}

DEPLOY_HOOKS = [
    "before_deploy",
    "before_extract",
    "after_extract",
    "before_symlink",
    "after_symlink",
    "configure",
    "restart",
    "after_deploy",
]
UNCHANGED_HOOKS = ["before_deploy", "configure", "after_deploy"]


@pytest.fixture
def v1_artifact(make_tarball) -> Path:
    return make_tarball(V1_FILES, name="app-1.0.0.tar.gz")


@pytest.fixture
def v2_artifact(make_tarball) -> Path:
    return make_tarball(V2_FILES, name="app-2.0.0.tar.gz")


@pytest.fixture
def run(make_config, recording_hooks):
    """Deploy a local artifact and return (result, deployer)."""

    def _run(artifact: Path, version: str, registry=None, **overrides):
        config = make_config(str(artifact), version=version, **overrides)
        deployer = Deployer(config, hooks=registry if registry is not None else recording_hooks)
        return deployer.deploy(), deployer

    return _run


def _age(path: Path, seconds: float) -> None:
    os.utime(path, (seconds, seconds))


class TestFirstInstall:
    def test_installs_and_promotes(self, run, v1_artifact, deploy_to, recording_hooks):
        result, deployer = run(v1_artifact, "1.0.0")

        release = deploy_to / "releases" / "1.0.0"
        assert result.status is OperationStatus.SUCCESS
        assert result.deployed is True
        assert result.decision == "first_install"
        assert result.previous_version is None
        assert (release / "bin" / "app").read_bytes() == V1_FILES["bin/app"]
        assert Path(os.readlink(deploy_to / "current")) == release
        assert (release / "manifest.yaml").is_file()
        assert recording_hooks.names == DEPLOY_HOOKS
        assert result.hooks_run == DEPLOY_HOOKS

    def test_manifest_matches_release(self, run, v1_artifact):
        _, deployer = run(v1_artifact, "1.0.0")
        saved = deployer.store.read_manifest("1.0.0")
        assert sorted(saved) == ["bin/app", "conf/app.yml"]
        assert deployer.verify().drifted is False

    def test_hooks_see_must_deploy(self, run, v1_artifact, recording_hooks):
        run(v1_artifact, "1.0.0")
        assert all(call.must_deploy for call in recording_hooks.calls)
        assert recording_hooks.calls[0].context.version == "1.0.0"

    def test_shared_directories_and_symlinks(self, run, v1_artifact, deploy_to):
        run(v1_artifact, "1.0.0", symlinks={"logs": "log"}, shared_directories=["pids"])

        shared = deploy_to / "shared"
        link = deploy_to / "releases" / "1.0.0" / "log"
        assert (shared / "pids").is_dir()
        assert link.is_symlink()
        assert Path(os.readlink(link)) == shared / "logs"

    def test_migrate_hooks(self, run, v1_artifact, recording_hooks):
        run(v1_artifact, "1.0.0", should_migrate=True)
        names = recording_hooks.names
        assert names[names.index("configure") + 1:names.index("restart")] == [
            "before_migrate", "migrate", "after_migrate"
        ]


class TestRerun:
    def test_unchanged_release_is_not_extracted_again(self, run, v1_artifact, deploy_to, recording_hooks):
        run(v1_artifact, "1.0.0")
        manifest = deploy_to / "releases" / "1.0.0" / "manifest.yaml"
        before = manifest.stat().st_mtime_ns
        recording_hooks.calls.clear()

        result, _ = run(v1_artifact, "1.0.0", should_migrate=True)

        assert result.status is OperationStatus.SKIPPED
        assert result.deployed is False
        assert result.decision == "current_version"
        assert recording_hooks.names == UNCHANGED_HOOKS
        assert manifest.stat().st_mtime_ns == before

    def test_drifted_current_release_is_restored(self, run, v1_artifact, deploy_to):
        run(v1_artifact, "1.0.0")
        edited = deploy_to / "releases" / "1.0.0" / "conf" / "app.yml"
        edited.write_text("level: trace\n")

        result, _ = run(v1_artifact, "1.0.0")

        assert result.deployed is True
        assert result.decision == "current_version"
        assert result.changed_files == ["conf/app.yml"]
        assert edited.read_bytes() == V1_FILES["conf/app.yml"]

    def test_force_extracts_intact_release(self, run, v1_artifact, recording_hooks):
        run(v1_artifact, "1.0.0")
        recording_hooks.calls.clear()

        result, _ = run(v1_artifact, "1.0.0", force=True)

        assert result.deployed is True
        assert recording_hooks.names == DEPLOY_HOOKS


class TestUpgradeAndRollback:
    def test_new_version(self, run, v1_artifact, v2_artifact, deploy_to):
        run(v1_artifact, "1.0.0")

        result, deployer = run(v2_artifact, "2.0.0")

        assert result.decision == "new_version"
        assert result.previous_version == "1.0.0"
        assert deployer.store.current_version() == "2.0.0"
        assert deployer.store.list_previous_versions() == ["1.0.0"]

    def test_rollback_to_intact_release(self, run, v1_artifact, v2_artifact, deploy_to, recording_hooks):
        run(v1_artifact, "1.0.0")
        run(v2_artifact, "2.0.0")
        recording_hooks.calls.clear()

        result, deployer = run(v1_artifact, "1.0.0")

        assert result.decision == "retained_version"
        assert result.deployed is False
        assert deployer.store.current_version() == "1.0.0"
        assert recording_hooks.names == UNCHANGED_HOOKS

    def test_corrupted_retained_release_is_redeployed(self, run, v1_artifact, v2_artifact, deploy_to):
        run(v1_artifact, "1.0.0")
        run(v2_artifact, "2.0.0")
        (deploy_to / "releases" / "1.0.0" / "bin" / "app").unlink()

        result, deployer = run(v1_artifact, "1.0.0")

        assert result.decision == "retained_version"
        assert result.deployed is True
        assert result.changed_files == ["bin/app"]
        assert (deploy_to / "releases" / "1.0.0" / "bin" / "app").is_file()
        assert deployer.store.current_version() == "1.0.0"


class TestRetention:
    def test_prunes_before_deploying(self, run, make_tarball, deploy_to, cache_root):
        for index, version in enumerate(["1.0.0", "2.0.0", "3.0.0"]):
            artifact = make_tarball({"v.txt": version.encode()}, name=f"app-{version}.tar.gz")
            run(artifact, version, keep=1)
            _age(deploy_to / "releases" / version, 1_000 + index)

        artifact = make_tarball({"v.txt": b"4"}, name="app-4.0.0.tar.gz")
        result, deployer = run(artifact, "4.0.0", keep=1)

        assert result.pruned_versions == ["1.0.0"]
        assert not (deploy_to / "releases" / "1.0.0").exists()
        assert not (cache_root / "app" / "1.0.0").exists()
        assert deployer.store.list_previous_versions() == ["2.0.0", "3.0.0"]
        assert deployer.store.current_version() == "4.0.0"


class TestFailures:
    def test_hook_failure_aborts_before_cutover(self, run, v1_artifact, v2_artifact, recording_hooks, deploy_to):
        run(v1_artifact, "1.0.0")

        def fail(hook_context):
            raise RuntimeError("boom")

        recording_hooks.register(HookPoint.AFTER_EXTRACT, fail)
        with pytest.raises(HookError) as excinfo:
            run(v2_artifact, "2.0.0")
        assert excinfo.value.hook == "after_extract"

        release = deploy_to / "releases" / "2.0.0"
        assert release.is_dir()
        assert not (release / "manifest.yaml").exists()
        assert Path(os.readlink(deploy_to / "current")).name == "1.0.0"

        recording_hooks.unregister(HookPoint.AFTER_EXTRACT)
        result, deployer = run(v2_artifact, "2.0.0")

        assert result.decision == "new_version"
        assert result.deployed is True
        assert deployer.store.current_version() == "2.0.0"

    def test_unsupported_archive(self, run, tmp_dir):
        artifact = tmp_dir / "app-1.0.0.rar"
        artifact.write_bytes(b"not really")

        with pytest.raises(ConfigurationError):
            run(artifact, "1.0.0")

    def test_tar_member_outside_release(self, run, make_tarball, deploy_to):
        artifact = make_tarball({"bin/app": b"app", "../../escaped.txt": b"owned"})

        with pytest.raises(RetrievalError):
            run(artifact, "1.0.0")

        assert not (deploy_to / "escaped.txt").exists()
        assert not (deploy_to / "releases" / "escaped.txt").exists()
        assert not (deploy_to / "current").exists()

    def test_zip_member_outside_release_is_skipped(self, run, make_zip, deploy_to):
        artifact = make_zip({"index.html": b"<html/>", "../../escaped.txt": b"owned"})

        run(artifact, "1.0.0")

        assert (deploy_to / "releases" / "1.0.0" / "index.html").exists()
        assert not (deploy_to / "escaped.txt").exists()

    def test_corrupt_archive(self, run, tmp_dir):
        artifact = tmp_dir / "app-1.0.0.tar.gz"
        artifact.write_bytes(b"not a tarball")

        with pytest.raises(RetrievalError):
            run(artifact, "1.0.0")

    def test_locked_target(self, make_config, v1_artifact, deploy_to):
        deployer = Deployer(make_config(str(v1_artifact)))

        with DeployLock(deploy_to / ".deploy.lock"):
            with pytest.raises(DeployLockedError):
                deployer.deploy()

        assert deployer.deploy().deployed is True

    def test_lock_can_be_disabled(self, make_config, v1_artifact, deploy_to):
        deployer = Deployer(make_config(str(v1_artifact), lock=False))

        with DeployLock(deploy_to / ".deploy.lock"):
            assert deployer.deploy().deployed is True


class TestMaterializeModes:
    def test_zip_artifact(self, run, make_zip, deploy_to):
        artifact = make_zip({"webapp/index.html": b"<html/>"}, name="app-1.0.0.war")

        run(artifact, "1.0.0")

        assert (deploy_to / "releases" / "1.0.0" / "webapp" / "index.html").read_bytes() == b"<html/>"

    def test_copy_mode(self, run, tmp_dir, deploy_to):
        artifact = tmp_dir / "app-1.0.0.jar"
        artifact.write_bytes(b"jar")

        run(artifact, "1.0.0", is_tarball=False)

        release = deploy_to / "releases" / "1.0.0"
        assert (release / "app-1.0.0.jar").read_bytes() == b"jar"
        assert "app-1.0.0.jar" in (release / "manifest.yaml").read_text()


class TestCommandHooks:
    def test_command_sees_environment(self, run, v1_artifact, deploy_to):
        hooks = {"after_deploy": 'echo "$ARTIFACT_DEPLOY_VERSION $ARTIFACT_DEPLOY_HOOK" > "$ARTIFACT_DEPLOY_DEPLOY_TO/hook.out"'}

        result, _ = run(v1_artifact, "1.0.0", hooks=hooks)

        assert (deploy_to / "hook.out").read_text().strip() == "1.0.0 after_deploy"
        assert "after_deploy" in result.hooks_run

    def test_failing_command(self, make_config, v1_artifact):
        config = make_config(str(v1_artifact), hooks={"before_deploy": "exit 3"})

        with pytest.raises(HookError) as excinfo:
            Deployer(config).deploy()

        assert excinfo.value.hook == "before_deploy"
        assert "status 3" in str(excinfo.value)
