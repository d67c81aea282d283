"""Shell command hooks"""

from pathlib import Path
from typing import Dict, Any, Optional

from ..base import Hook, HookContext, HookPoint, HookRegistry
from ...api.exceptions import HookError
from ...constants import ENV_HOOK_PREFIX
from ...core.host import Host, LocalHost


class CommandHook(Hook):
    """Runs a configured shell command through the host

    The command sees the deployment values as ``ARTIFACT_DEPLOY_*``
    environment variables and runs inside the release directory when it
    exists.
    """

    def __init__(self,
                 command: str,
                 host: Optional[Host] = None,
                 owner: Optional[str] = None,
                 group: Optional[str] = None,
                 config: Dict[str, Any] = None):
        super().__init__(config)
        self.command = command
        self.host = host or LocalHost()
        self.owner = owner
        self.group = group

    def __call__(self, hook_context: HookContext) -> None:
        env = {
            f"{ENV_HOOK_PREFIX}{key}": value
            for key, value in hook_context.environment().items()
        }

        context = hook_context.context
        cwd = context.release_path if Path(context.release_path).is_dir() else context.deploy_to

        status = self.host.run_command(
            self.command,
            owner=self.owner,
            group=self.group,
            cwd=cwd,
            env=env
        )

        if status != 0:
            raise HookError(hook_context.hook.value, f"command '{self.command}' exited with status {status}")

    def __repr__(self) -> str:
        return f"CommandHook({self.command!r})"


def register_command_hooks(registry: HookRegistry,
                           hooks: Dict[str, str],
                           host: Optional[Host] = None,
                           owner: Optional[str] = None,
                           group: Optional[str] = None) -> HookRegistry:
    """Register one CommandHook per configured slot

    Raises:
        ConfigurationError: If a slot name is unknown
    """
    for name, command in (hooks or {}).items():
        if not command:
            continue
        registry.register(HookPoint.parse(name), CommandHook(command, host, owner, group))
    return registry
