"""Tests for DeploymentDecider: the four decision branches."""

import pytest

from artifact_deploy.api.exceptions import ManifestReadError
from artifact_deploy.core.decider import DeploymentDecider
from artifact_deploy.models.release import Decision

FILES = {"bin/app": "aaa", "conf/app.yml": "bbb"}


@pytest.fixture
def decider(memory_store) -> DeploymentDecider:
    return DeploymentDecider(memory_store)


class TestBranches:
    def test_first_install(self, decider, make_context):
        decision = decider.decide(make_context("1.0.0"))

        assert decision.branch is Decision.FIRST_INSTALL
        assert decision.must_deploy is True

    def test_new_version(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.current = "1.0.0"

        decision = decider.decide(make_context("2.0.0"))

        assert decision.branch is Decision.NEW_VERSION
        assert decision.must_deploy is True

    def test_retained_version_intact(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.add_release("2.0.0", FILES)
        memory_store.current = "2.0.0"

        decision = decider.decide(make_context("1.0.0"))

        assert decision.branch is Decision.RETAINED_VERSION
        assert decision.must_deploy is False

    def test_retained_version_drifted(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.add_release("2.0.0", FILES)
        memory_store.current = "2.0.0"
        memory_store.files["1.0.0"]["conf/app.yml"] = "edited"

        decision = decider.decide(make_context("1.0.0"))

        assert decision.branch is Decision.RETAINED_VERSION
        assert decision.must_deploy is True
        assert decision.changed_files == ("conf/app.yml",)

    def test_current_version_intact(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.current = "1.0.0"

        decision = decider.decide(make_context("1.0.0"))

        assert decision.branch is Decision.CURRENT_VERSION
        assert decision.must_deploy is False
        assert decision.deploy is False

    def test_current_version_missing_file(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.current = "1.0.0"
        del memory_store.files["1.0.0"]["bin/app"]

        decision = decider.decide(make_context("1.0.0"))

        assert decision.must_deploy is True
        assert decision.changed_files == ("bin/app",)

    def test_added_file_does_not_trigger_deploy(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.current = "1.0.0"
        memory_store.files["1.0.0"]["logs/out.log"] = "ccc"

        assert decider.decide(make_context("1.0.0")).must_deploy is False


class TestForce:
    def test_force_overrides_intact_release(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.current = "1.0.0"

        decision = decider.decide(make_context("1.0.0", force=True))

        assert decision.branch is Decision.CURRENT_VERSION
        assert decision.must_deploy is True
        assert decision.forced is True
        assert decision.deploy is True

    def test_force_on_first_install(self, decider, make_context):
        decision = decider.decide(make_context("1.0.0", force=True))
        assert decision.branch is Decision.FIRST_INSTALL
        assert decision.must_deploy is True


class TestManifestState:
    def test_unreadable_current_manifest(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES, saved=False)
        memory_store.current = "1.0.0"

        with pytest.raises(ManifestReadError):
            decider.decide(make_context("1.0.0"))

    def test_retained_release_without_manifest_is_reinstalled(self, decider, memory_store, make_context):
        memory_store.add_release("1.0.0", FILES)
        memory_store.add_release("2.0.0", {}, saved=False)
        memory_store.current = "1.0.0"

        decision = decider.decide(make_context("2.0.0"))

        assert decision.branch is Decision.NEW_VERSION
        assert decision.must_deploy is True

    def test_has_drifted(self, decider, memory_store):
        memory_store.add_release("1.0.0", FILES)
        assert decider.has_drifted("1.0.0") is False

        memory_store.files["1.0.0"]["bin/app"] = "changed"
        assert decider.has_drifted("1.0.0") is True
        assert decider.drifted_files("1.0.0") == ["bin/app"]
