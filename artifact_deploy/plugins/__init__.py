# artifact_deploy/plugins/__init__.py
"""Lifecycle hooks for artifact-deploy"""

from .base import (
    Hook,
    HookCallback,
    HookContext,
    HookPoint,
    HookRegistry,
)
from .builtin import CommandHook, register_command_hooks

__all__ = [
    'Hook',
    'HookCallback',
    'HookContext',
    'HookPoint',
    'HookRegistry',
    'CommandHook',
    'register_command_hooks',
]
