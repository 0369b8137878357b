"""Well-known locations of Claude Code configuration files.

All path construction goes through ClaudePaths so that tests can point the
whole system at a temporary home directory, and so that development mode
(``.claude-dev``) is handled in one place.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ClaudePaths:
    """Path layout rooted at a home directory.

    Attributes:
        home: User home directory (``~``)
        dev_mode: Use ``.claude-dev`` naming instead of ``.claude``
    """

    home: Path
    dev_mode: bool = False

    @property
    def claude_dir_name(self) -> str:
        return ".claude-dev" if self.dev_mode else ".claude"

    @property
    def mcp_file_name(self) -> str:
        return ".mcp-dev.json" if self.dev_mode else ".mcp.json"

    @property
    def claude_json_name(self) -> str:
        return ".claude-dev.json" if self.dev_mode else ".claude.json"

    # User-level paths

    def user_claude_dir(self) -> Path:
        return self.home / self.claude_dir_name

    def user_claude_json(self) -> Path:
        """Path to ~/.claude.json (user MCP servers and the project registry)."""
        return self.home / self.claude_json_name

    def user_settings(self) -> Path:
        """Path to ~/.claude/settings.json (user hooks and permissions)."""
        return self.user_claude_dir() / "settings.json"

    # Project-level paths

    def project_claude_dir(self, project_path: Path) -> Path:
        return project_path / self.claude_dir_name

    def project_settings(self, project_path: Path) -> Path:
        return self.project_claude_dir(project_path) / "settings.json"

    def project_local_settings(self, project_path: Path) -> Path:
        return self.project_claude_dir(project_path) / "settings.local.json"

    def project_mcp_json(self, project_path: Path) -> Path:
        return project_path / self.mcp_file_name

