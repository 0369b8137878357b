"""Where MCP server definitions live.

User servers are stored under the root-level ``mcpServers`` key of
``~/.claude.json``. Project servers are written to ``<project>/.mcp.json``;
older setups kept them in ``.claude/settings.json`` or
``.claude/settings.local.json``, which are still read so that a server is
found (and migrated) wherever it currently lives.
"""

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from claude_config_manager.errors import ParseError
from claude_config_manager.io.json_document import load_json_document
from claude_config_manager.models.artifact import Scope
from claude_config_manager.paths import ClaudePaths

logger = logging.getLogger(__name__)

MCP_SERVERS_KEY = "mcpServers"


@dataclass(frozen=True)
class ServerLocation:
    """A server definition found in a specific file."""

    path: Path
    document: dict[str, Any]
    config: dict[str, Any]


def locate(paths: ClaudePaths, scope: Scope | str, project_path: Path | None = None) -> Path:
    """Canonical file for new or updated MCP servers in ``scope``."""
    if Scope(scope) is Scope.USER:
        return paths.user_claude_json()
    if project_path is None:
        raise ValueError("project_path is required for project scope")
    return paths.project_mcp_json(project_path)


def project_candidates(paths: ClaudePaths, project_path: Path) -> list[Path]:
    """All files that may hold project servers, canonical file first."""
    return [
        paths.project_mcp_json(project_path),
        paths.project_settings(project_path),
        paths.project_local_settings(project_path),
    ]


def get_servers(document: dict[str, Any]) -> dict[str, Any]:
    servers = document.get(MCP_SERVERS_KEY)
    return servers if isinstance(servers, dict) else {}


def find_server(candidates: list[Path], name: str) -> ServerLocation | None:
    """Return the first candidate file that defines server ``name``.

    Only the first candidate is authoritative; an unreadable legacy file
    after it is logged and skipped.

    Raises:
        ParseError: If the first candidate exists but is not valid JSON
    """
    for index, path in enumerate(candidates):
        try:
            document = load_json_document(path, label="target file")
        except ParseError as e:
            if index == 0:
                raise
            logger.warning("Skipping %s: %s", path, e.message)
            continue
        config = get_servers(document).get(name)
        if isinstance(config, dict):
            return ServerLocation(path=path, document=document, config=config)
    return None


def set_server(document: dict[str, Any], name: str, config: dict[str, Any]) -> dict[str, Any]:
    """Add or replace a server, keeping its position if it already exists."""
    result = copy.deepcopy(document)
    servers = get_servers(result)
    servers[name] = copy.deepcopy(config)
    result[MCP_SERVERS_KEY] = servers
    return result


def rename_server(
    document: dict[str, Any],
    old_name: str,
    new_name: str,
    config: dict[str, Any],
) -> dict[str, Any]:
    """Replace server ``old_name`` with ``new_name`` at the same position."""
    result = copy.deepcopy(document)
    servers = get_servers(result)
    result[MCP_SERVERS_KEY] = {
        (new_name if key == old_name else key): (
            copy.deepcopy(config) if key == old_name else value
        )
        for key, value in servers.items()
    }
    return result


def remove_server(document: dict[str, Any], name: str) -> dict[str, Any]:
    """Remove a server; an ``mcpServers`` object left empty is removed too."""
    result = copy.deepcopy(document)
    servers = get_servers(result)
    servers.pop(name, None)
    if servers:
        result[MCP_SERVERS_KEY] = servers
    else:
        result.pop(MCP_SERVERS_KEY, None)
    return result
