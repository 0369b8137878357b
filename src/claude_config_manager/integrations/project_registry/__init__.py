"""Project registry integration."""

from claude_config_manager.integrations.project_registry.abc import ProjectRegistry
from claude_config_manager.integrations.project_registry.fake import FakeProjectRegistry

__all__ = ["ProjectRegistry", "FakeProjectRegistry"]
