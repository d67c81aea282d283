# artifact_deploy/services/__init__.py
"""Services for artifact-deploy"""

from .config_service import ConfigService, CONFIG_SCHEMA

__all__ = [
    "ConfigService",
    "CONFIG_SCHEMA",
]
