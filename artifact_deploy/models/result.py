"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status in (OperationStatus.SUCCESS, OperationStatus.SKIPPED)

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = _utcnow()
        if status:
            self.status = status


@dataclass
class DeployResult(Result):
    """Result of one deployment run"""

    name: Optional[str] = None
    version: Optional[str] = None
    release_path: Optional[Path] = None
    artifact_path: Optional[Path] = None
    previous_version: Optional[str] = None
    decision: Optional[str] = None
    deployed: bool = False
    changed_files: List[str] = field(default_factory=list)
    pruned_versions: List[str] = field(default_factory=list)
    hooks_run: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "message": self.message,
            "name": self.name,
            "version": self.version,
            "release_path": str(self.release_path) if self.release_path else None,
            "artifact_path": str(self.artifact_path) if self.artifact_path else None,
            "previous_version": self.previous_version,
            "decision": self.decision,
            "deployed": self.deployed,
            "changed_files": self.changed_files,
            "pruned_versions": self.pruned_versions,
            "hooks_run": self.hooks_run,
            "warnings": self.warnings,
            "duration": self.duration
        }


@dataclass
class VerifyResult(Result):
    """Result of checking a release against its saved manifest"""

    version: Optional[str] = None
    release_path: Optional[Path] = None
    changed_files: List[str] = field(default_factory=list)

    @property
    def drifted(self) -> bool:
        return bool(self.changed_files)


@dataclass
class StatusResult(Result):
    """Installed releases of one artifact"""

    name: Optional[str] = None
    current_version: Optional[str] = None
    current_path: Optional[Path] = None
    previous_versions: List[str] = field(default_factory=list)
    changed_files: List[str] = field(default_factory=list)

    @property
    def drifted(self) -> bool:
        return bool(self.changed_files)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "current_version": self.current_version,
            "current_path": str(self.current_path) if self.current_path else None,
            "previous_versions": self.previous_versions,
            "changed_files": self.changed_files,
            "warnings": self.warnings
        }
