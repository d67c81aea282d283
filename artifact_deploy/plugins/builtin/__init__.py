# artifact_deploy/plugins/builtin/__init__.py
"""Built-in hooks for artifact-deploy"""

from .hooks import CommandHook, register_command_hooks

__all__ = [
    'CommandHook',
    'register_command_hooks',
]
