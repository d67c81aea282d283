# artifact_deploy/models/manifest.py
"""Release content manifest model"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping


@dataclass
class Manifest:
    """Mapping of relative file path to content hash for one release"""
    files: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def __contains__(self, path: object) -> bool:
        return path in self.files

    def __getitem__(self, path: str) -> str:
        return self.files[path]

    def get(self, path: str, default=None):
        return self.files.get(path, default)

    def items(self):
        return self.files.items()

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary, keys sorted for stable serialization"""
        return {path: self.files[path] for path in sorted(self.files)}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> 'Manifest':
        """Create from dictionary"""
        return cls(files={str(k): str(v) for k, v in data.items()})
