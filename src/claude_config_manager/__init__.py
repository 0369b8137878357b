"""claude-config-manager: copy and merge Claude Code configuration artifacts.

Import from submodules:
- version: __version__
- services.copy_service: CopyService (copy agents, commands, skills, hooks, MCP servers)
- services.mcp_service: McpService (update/delete MCP servers)
- main: create_app (FastAPI application)
"""

from claude_config_manager.version import __version__ as __version__
