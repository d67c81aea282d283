# artifact_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import status
from . import prune
from . import verify

__all__ = [
    "deploy",
    "status",
    "prune",
    "verify",
]
