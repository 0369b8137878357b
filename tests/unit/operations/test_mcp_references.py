"""Tests for MCP server reference scanning."""

import json
from pathlib import Path

from claude_config_manager.operations.references import (
    find_all_mcp_server_references,
    find_mcp_server_references,
)

SETTINGS = {
    "hooks": {
        "PreToolUse": [
            {
                "matcher": "mcp__github__create_issue",
                "hooks": [{"type": "command", "command": "echo GitHub issue"}],
            },
            {"hooks": [{"type": "command", "command": "lint.sh"}]},
        ]
    },
    "permissions": {
        "allow": ["Bash", "mcp__github", "mcp__github__list_prs"],
        "deny": ["mcp__githubber__x"],
    },
}


def test_find_mcp_server_references(tmp_path: Path) -> None:
    """Test hook substring matches and exact or prefixed permission matches."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(SETTINGS), encoding="utf-8")

    references = find_mcp_server_references("github", path)

    assert references == [
        'hooks.PreToolUse[0] (matcher "mcp__github__create_issue", hook 0): '
        "Command may reference this server",
        'permissions.allow[1]: "mcp__github" references this server',
        'permissions.allow[2]: "mcp__github__list_prs" references this server',
    ]


def test_find_mcp_server_references_missing_file(tmp_path: Path) -> None:
    assert find_mcp_server_references("github", tmp_path / "missing.json") == []


def test_find_mcp_server_references_invalid_json(tmp_path: Path) -> None:
    """Test that an unreadable file is skipped rather than raised."""
    path = tmp_path / "settings.json"
    path.write_text("{broken", encoding="utf-8")

    assert find_mcp_server_references("github", path) == []


async def test_find_all_mcp_server_references_keeps_order(tmp_path: Path) -> None:
    first = tmp_path / "settings.json"
    second = tmp_path / "settings.local.json"
    first.write_text(json.dumps({"permissions": {"ask": ["mcp__db"]}}), encoding="utf-8")
    second.write_text(json.dumps({"permissions": {"deny": ["mcp__db__drop"]}}), encoding="utf-8")

    references = await find_all_mcp_server_references("db", [first, second])

    assert references == [
        'permissions.ask[0]: "mcp__db" references this server',
        'permissions.deny[0]: "mcp__db__drop" references this server',
    ]
