"""Configuration data models"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import (
    CURRENT_LINK_NAME,
    DEFAULT_CACHE_DIR,
    DEFAULT_CHECKSUM_ALGORITHM,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_KEEP,
    ENV_CACHE_DIR,
    SHARED_DIR,
)


@dataclass
class RepositoryConfig:
    """Binary repository (Maven / Nexus) connection settings"""

    url: Optional[str] = None
    repository: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = DEFAULT_HTTP_TIMEOUT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"timeout": self.timeout}
        if self.url:
            data["url"] = self.url
        if self.repository:
            data["repository"] = self.repository
        if self.username:
            data["username"] = self.username
        if self.password:
            data["password"] = self.password
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositoryConfig':
        """Create from dictionary"""
        return cls(
            url=data.get("url"),
            repository=data.get("repository"),
            username=data.get("username"),
            password=data.get("password"),
            timeout=float(data.get("timeout", DEFAULT_HTTP_TIMEOUT))
        )


@dataclass
class HttpConfig:
    """Direct download settings"""

    timeout: float = DEFAULT_HTTP_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "timeout": self.timeout,
            "headers": self.headers
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HttpConfig':
        """Create from dictionary"""
        return cls(
            timeout=float(data.get("timeout", DEFAULT_HTTP_TIMEOUT)),
            headers=dict(data.get("headers", {}))
        )


@dataclass
class DeployConfig:
    """Complete deployment configuration for one artifact"""

    name: str
    artifact_location: str
    version: str
    deploy_to: str
    checksum: Optional[str] = None
    checksum_algorithm: str = DEFAULT_CHECKSUM_ALGORITHM

    # Layout; derived from deploy_to when not set
    current_path: Optional[str] = None
    shared_path: Optional[str] = None
    cache_root: Optional[str] = None

    owner: Optional[str] = None
    group: Optional[str] = None

    keep: int = DEFAULT_KEEP
    force: bool = False
    is_tarball: bool = True
    should_migrate: bool = False

    # shared/<key> is linked to release/<value>
    symlinks: Dict[str, str] = field(default_factory=dict)
    shared_directories: List[str] = field(default_factory=list)

    # Hook slot name -> shell command
    hooks: Dict[str, str] = field(default_factory=dict)

    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    http: HttpConfig = field(default_factory=HttpConfig)

    lock: bool = True
    lock_timeout: float = 0.0

    def get_current_path(self) -> Path:
        """Path of the current-release symlink"""
        if self.current_path:
            return Path(self.current_path)
        return Path(self.deploy_to) / CURRENT_LINK_NAME

    def get_shared_path(self) -> Path:
        """Path of the shared directory"""
        if self.shared_path:
            return Path(self.shared_path)
        return Path(self.deploy_to) / SHARED_DIR

    def get_cache_root(self) -> Path:
        """Root directory of retrieved artifacts"""
        root = self.cache_root or os.environ.get(ENV_CACHE_DIR) or DEFAULT_CACHE_DIR
        return Path(root).expanduser()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "name": self.name,
            "artifact_location": self.artifact_location,
            "version": self.version,
            "deploy_to": self.deploy_to,
            "checksum_algorithm": self.checksum_algorithm,
            "keep": self.keep,
            "force": self.force,
            "is_tarball": self.is_tarball,
            "should_migrate": self.should_migrate,
            "symlinks": self.symlinks,
            "shared_directories": self.shared_directories,
            "hooks": self.hooks,
            "repository": self.repository.to_dict(),
            "http": self.http.to_dict(),
            "lock": self.lock,
            "lock_timeout": self.lock_timeout
        }

        for key in ("checksum", "current_path", "shared_path", "cache_root", "owner", "group"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeployConfig':
        """Create from dictionary"""
        return cls(
            name=data["name"],
            artifact_location=str(data["artifact_location"]),
            version=str(data["version"]),
            deploy_to=str(data["deploy_to"]),
            checksum=data.get("checksum"),
            checksum_algorithm=data.get("checksum_algorithm", DEFAULT_CHECKSUM_ALGORITHM),
            current_path=data.get("current_path"),
            shared_path=data.get("shared_path"),
            cache_root=data.get("cache_root"),
            owner=data.get("owner"),
            group=data.get("group"),
            keep=int(data.get("keep", DEFAULT_KEEP)),
            force=bool(data.get("force", False)),
            is_tarball=bool(data.get("is_tarball", True)),
            should_migrate=bool(data.get("should_migrate", False)),
            symlinks=dict(data.get("symlinks", {})),
            shared_directories=list(data.get("shared_directories", [])),
            hooks=dict(data.get("hooks", {})),
            repository=RepositoryConfig.from_dict(data.get("repository", {})),
            http=HttpConfig.from_dict(data.get("http", {})),
            lock=bool(data.get("lock", True)),
            lock_timeout=float(data.get("lock_timeout", 0.0))
        )
