"""Tests for LocalHost."""

import os
from pathlib import Path

import pytest

from artifact_deploy.api.exceptions import ConfigurationError
from artifact_deploy.core.host import LocalHost

UNKNOWN_USER = "artifact-deploy-no-such-user"


class TestLocalHost:
    def test_ensure_directory(self, tmp_dir: Path):
        path = LocalHost().ensure_directory(tmp_dir / "a" / "b", mode=0o750)
        assert path.is_dir()
        assert path.stat().st_mode & 0o777 == 0o750

    def test_ensure_symlink_replaces_existing(self, tmp_dir: Path):
        host = LocalHost()
        (tmp_dir / "one").mkdir()
        (tmp_dir / "two").mkdir()

        host.ensure_symlink(tmp_dir / "link", tmp_dir / "one")
        host.ensure_symlink(tmp_dir / "link", tmp_dir / "two")

        assert Path(os.readlink(tmp_dir / "link")) == tmp_dir / "two"

    def test_run_command_status_and_environment(self, tmp_dir: Path):
        host = LocalHost()
        status = host.run_command('echo "$GREETING" > out.txt', cwd=tmp_dir, env={"GREETING": "hi"})

        assert status == 0
        assert (tmp_dir / "out.txt").read_text() == "hi\n"
        assert host.run_command("exit 3", cwd=tmp_dir) == 3

    def test_unknown_owner(self, tmp_dir: Path):
        with pytest.raises(ConfigurationError):
            LocalHost().apply_ownership(tmp_dir, owner=UNKNOWN_USER)

    def test_unknown_group(self, tmp_dir: Path):
        with pytest.raises(ConfigurationError):
            LocalHost().apply_ownership(tmp_dir, group=UNKNOWN_USER)
