"""Find hooks and permissions that refer to an MCP server.

The scan is advisory: callers report what it finds but never block on it.
Unreadable files are logged and skipped.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.io.json_document import load_json_document

logger = logging.getLogger(__name__)

PERMISSION_TYPES = ("allow", "deny", "ask")


def _hook_references(name: str, hooks: Any) -> list[str]:
    if not isinstance(hooks, dict):
        return []

    needle = name.lower()
    references: list[str] = []
    for event, groups in hooks.items():
        if not isinstance(groups, list):
            continue
        for group_index, group in enumerate(groups):
            if not isinstance(group, dict):
                continue
            matcher = group.get("matcher") or "*"
            matcher_display = "all matchers" if matcher == "*" else f'matcher "{matcher}"'
            entries = group.get("hooks")
            if not isinstance(entries, list):
                continue
            for hook_index, hook in enumerate(entries):
                command = hook.get("command") if isinstance(hook, dict) else None
                if isinstance(command, str) and needle in command.lower():
                    references.append(
                        f"hooks.{event}[{group_index}] ({matcher_display}, hook {hook_index}): "
                        "Command may reference this server"
                    )
    return references


def _permission_references(name: str, permissions: Any) -> list[str]:
    if not isinstance(permissions, dict):
        return []

    exact = f"mcp__{name}"
    prefix = f"mcp__{name}__"
    references: list[str] = []
    for permission_type in PERMISSION_TYPES:
        entries = permissions.get(permission_type)
        if not isinstance(entries, list):
            continue
        for index, permission in enumerate(entries):
            if isinstance(permission, str) and (
                permission == exact or permission.startswith(prefix)
            ):
                references.append(
                    f'permissions.{permission_type}[{index}]: "{permission}" references this server'
                )
    return references


def find_mcp_server_references(name: str, config_path: Path) -> list[str]:
    """Describe every hook command and permission in a file that refers to ``name``.

    Hook commands match on a case-insensitive substring; permissions match
    ``mcp__<name>`` exactly or as the ``mcp__<name>__`` prefix of a tool.
    """
    try:
        document = load_json_document(config_path)
    except ConfigManagerError as e:
        logger.warning("Could not check references in %s: %s", config_path, e.message)
        return []

    return _hook_references(name, document.get("hooks")) + _permission_references(
        name, document.get("permissions")
    )


async def find_all_mcp_server_references(name: str, config_paths: list[Path]) -> list[str]:
    """Scan several files concurrently; results keep the order of ``config_paths``."""
    results = await asyncio.gather(
        *(asyncio.to_thread(find_mcp_server_references, name, path) for path in config_paths)
    )
    return [reference for references in results for reference in references]
