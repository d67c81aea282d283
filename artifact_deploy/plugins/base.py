# artifact_deploy/plugins/base.py
"""Lifecycle hook slots and registry"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Any, Union

from ..api.exceptions import ConfigurationError, HookError
from ..models.release import DeployContext


class HookPoint(Enum):
    """Hook slots of a deployment run, in execution order"""
    BEFORE_DEPLOY = "before_deploy"
    BEFORE_EXTRACT = "before_extract"
    AFTER_EXTRACT = "after_extract"
    BEFORE_SYMLINK = "before_symlink"
    AFTER_SYMLINK = "after_symlink"
    CONFIGURE = "configure"
    BEFORE_MIGRATE = "before_migrate"
    MIGRATE = "migrate"
    AFTER_MIGRATE = "after_migrate"
    RESTART = "restart"
    AFTER_DEPLOY = "after_deploy"

    @classmethod
    def parse(cls, name: Union[str, 'HookPoint']) -> 'HookPoint':
        """Hook point from its slot name"""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(hp.value for hp in cls)
            raise ConfigurationError(f"Unknown hook '{name}', expected one of: {valid}")


@dataclass
class HookContext:
    """Context passed to hook callbacks"""
    hook: HookPoint
    context: DeployContext
    must_deploy: bool
    data: Dict[str, Any] = field(default_factory=dict)

    def environment(self) -> Dict[str, str]:
        """Deployment values for child processes"""
        env = self.context.hook_environment()
        env["HOOK"] = self.hook.value
        env["MUST_DEPLOY"] = "1" if self.must_deploy else "0"
        return env


class Hook(ABC):
    """Base class for hook callbacks configured by name"""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def __call__(self, hook_context: HookContext) -> None:
        """Run the hook; raise HookError on failure"""
        pass


HookCallback = Callable[[HookContext], None]


class HookRegistry:
    """Ordered callbacks per hook slot

    An empty slot is a no-op. Callbacks of one slot run in registration
    order.
    """

    def __init__(self):
        self._hooks: Dict[HookPoint, List[HookCallback]] = {hp: [] for hp in HookPoint}
        self.logger = logging.getLogger("HookRegistry")

    def register(self, hook: Union[str, HookPoint], callback: HookCallback) -> None:
        """
        Register a callback for a hook slot

        Args:
            hook: Hook point or its slot name
            callback: Callable taking a HookContext
        """
        hook_point = HookPoint.parse(hook)
        self._hooks[hook_point].append(callback)
        self.logger.debug(f"Registered hook callback for {hook_point.value}")

    def unregister(self, hook: Union[str, HookPoint]) -> None:
        """Clear a hook slot"""
        self._hooks[HookPoint.parse(hook)] = []

    def has(self, hook: Union[str, HookPoint]) -> bool:
        """Whether a slot has any callback"""
        return bool(self._hooks[HookPoint.parse(hook)])

    def registered(self) -> List[HookPoint]:
        """Non-empty slots in execution order"""
        return [hp for hp in HookPoint if self._hooks[hp]]

    def invoke(self,
               hook: Union[str, HookPoint],
               context: DeployContext,
               must_deploy: bool = False) -> bool:
        """
        Run the callbacks of a slot

        Args:
            hook: Hook point or its slot name
            context: Deployment context
            must_deploy: Whether this run materializes the release

        Returns:
            True if any callback ran

        Raises:
            HookError: If a callback fails
        """
        hook_point = HookPoint.parse(hook)
        callbacks = self._hooks[hook_point]
        if not callbacks:
            return False

        hook_context = HookContext(hook=hook_point, context=context, must_deploy=must_deploy)
        self.logger.info(f"Running {hook_point.value} hook for {context.name} {context.version}")

        for callback in callbacks:
            try:
                callback(hook_context)
            except HookError:
                raise
            except Exception as e:
                raise HookError(hook_point.value, str(e)) from e

        return True
