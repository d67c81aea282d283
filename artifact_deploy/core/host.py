"""Host capabilities used by the deployment engine"""

import getpass
import grp
import logging
import os
import pwd
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from ..api.exceptions import ConfigurationError
from ..constants import DEFAULT_DIRECTORY_MODE
from ..utils.file_utils import replace_symlink

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Host(ABC):
    """Filesystem and process operations on the deploy target"""

    @abstractmethod
    def ensure_directory(self,
                         path: PathLike,
                         owner: Optional[str] = None,
                         group: Optional[str] = None,
                         mode: int = DEFAULT_DIRECTORY_MODE) -> Path:
        """Create a directory (and parents) if absent"""
        pass

    @abstractmethod
    def ensure_symlink(self,
                       path: PathLike,
                       target: PathLike,
                       owner: Optional[str] = None,
                       group: Optional[str] = None) -> Path:
        """Make ``path`` a symlink to ``target``"""
        pass

    @abstractmethod
    def run_command(self,
                    cmdline: str,
                    owner: Optional[str] = None,
                    group: Optional[str] = None,
                    cwd: Optional[PathLike] = None,
                    env: Optional[Dict[str, str]] = None) -> int:
        """Run a shell command and return its exit status"""
        pass

    @abstractmethod
    def apply_ownership(self,
                        path: PathLike,
                        owner: Optional[str] = None,
                        group: Optional[str] = None) -> None:
        """Change owner/group of a tree"""
        pass


class LocalHost(Host):
    """Host implementation for the machine this process runs on"""

    def ensure_directory(self,
                         path: PathLike,
                         owner: Optional[str] = None,
                         group: Optional[str] = None,
                         mode: int = DEFAULT_DIRECTORY_MODE) -> Path:
        path = Path(path)
        if not path.is_dir():
            logger.debug(f"Creating directory {path}")
            path.mkdir(parents=True, exist_ok=True)
            path.chmod(mode)

        self._chown(path, owner, group)
        return path

    def ensure_symlink(self,
                       path: PathLike,
                       target: PathLike,
                       owner: Optional[str] = None,
                       group: Optional[str] = None) -> Path:
        path = Path(path)
        target = Path(target)

        if path.is_symlink() and Path(os.readlink(path)) == target:
            return path

        if path.exists() and not path.is_symlink():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()

        path.parent.mkdir(parents=True, exist_ok=True)
        replace_symlink(path, target)
        logger.debug(f"Linked {path} -> {target}")

        self._chown(path, owner, group, follow_symlinks=False)
        return path

    def run_command(self,
                    cmdline: str,
                    owner: Optional[str] = None,
                    group: Optional[str] = None,
                    cwd: Optional[PathLike] = None,
                    env: Optional[Dict[str, str]] = None) -> int:
        full_env = os.environ.copy()
        if env:
            full_env.update(env)

        kwargs = {}
        if owner and owner != self._current_user():
            kwargs['user'] = owner
        if group and group != self._current_group():
            kwargs['group'] = group

        logger.info(f"Running: {cmdline}")
        completed = subprocess.run(
            cmdline,
            shell=True,
            cwd=str(cwd) if cwd else None,
            env=full_env,
            capture_output=True,
            text=True,
            **kwargs
        )

        if completed.stdout:
            logger.info(f"Command output: {completed.stdout.strip()}")
        if completed.stderr:
            logger.warning(f"Command error: {completed.stderr.strip()}")

        return completed.returncode

    def apply_ownership(self,
                        path: PathLike,
                        owner: Optional[str] = None,
                        group: Optional[str] = None) -> None:
        if not owner and not group:
            return

        path = Path(path)
        self._chown(path, owner, group)
        for root, dirs, files in os.walk(path):
            for name in dirs + files:
                self._chown(Path(root) / name, owner, group, follow_symlinks=False)

    @staticmethod
    def _current_user() -> Optional[str]:
        return getpass.getuser()

    @staticmethod
    def _current_group() -> Optional[str]:
        return grp.getgrgid(os.getgid()).gr_name

    @staticmethod
    def _chown(path: Path,
               owner: Optional[str],
               group: Optional[str],
               follow_symlinks: bool = True) -> None:
        if not owner and not group:
            return

        try:
            uid = pwd.getpwnam(owner).pw_uid if owner else -1
            gid = grp.getgrnam(group).gr_gid if group else -1
        except KeyError as e:
            raise ConfigurationError(f"Unknown owner/group: {owner}:{group}") from e

        os.chown(path, uid, gid, follow_symlinks=follow_symlinks)
