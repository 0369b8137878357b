"""Validation of MCP server definitions and updates.

Transports are mutually exclusive: ``stdio`` servers are launched from a
command line (command/args/env), ``http``/``sse`` servers are reached over a
URL (url/headers). A server without ``type`` is a stdio server.
"""

import re
from typing import Any

VALID_TRANSPORT_TYPES = ("stdio", "http", "sse")
DEFAULT_TRANSPORT = "stdio"

STDIO_FIELDS = ("command", "args", "env")
REMOTE_FIELDS = ("url", "headers")
UPDATABLE_FIELDS = (
    "type",
    "command",
    "args",
    "env",
    "url",
    "headers",
    "enabled",
    "timeout",
    "retries",
)

SERVER_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_string_map(value: Any) -> bool:
    return isinstance(value, dict) and all(isinstance(v, str) for v in value.values())


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_server_name(name: Any) -> list[str]:
    if not _is_non_empty_string(name):
        return ["Name must be a non-empty string"]
    if not SERVER_NAME_PATTERN.match(name):
        return ["Name can only contain letters, numbers, hyphens, and underscores"]
    return []


def _validate_common_fields(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if "enabled" in config and not isinstance(config["enabled"], bool):
        errors.append("Enabled must be a boolean")
    if "timeout" in config and not (_is_int(config["timeout"]) and config["timeout"] > 0):
        errors.append("Timeout must be a positive integer")
    if "retries" in config and not (_is_int(config["retries"]) and config["retries"] >= 0):
        errors.append("Retries must be a non-negative integer")
    return errors


def _validate_stdio_fields(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if "args" in config:
        if not isinstance(config["args"], list):
            errors.append("Args must be an array")
        elif not all(isinstance(arg, str) for arg in config["args"]):
            errors.append("All args must be strings")
    if "env" in config:
        if not isinstance(config["env"], dict):
            errors.append("Env must be an object")
        elif not _is_string_map(config["env"]):
            errors.append("All env values must be strings")
    return errors


def _validate_headers(config: dict[str, Any]) -> list[str]:
    if "headers" not in config:
        return []
    if not isinstance(config["headers"], dict):
        return ["Headers must be an object"]
    if not _is_string_map(config["headers"]):
        return ["All header values must be strings"]
    return []


def validate_mcp_config(name: Any, config: Any) -> list[str]:
    """Validate a complete MCP server definition.

    Args:
        name: Server name (key under ``mcpServers``)
        config: Server definition

    Returns:
        List of error messages, empty if the definition is valid
    """
    if not isinstance(config, dict):
        return ["MCP server configuration must be an object"]

    errors = validate_server_name(name)

    transport = config.get("type", DEFAULT_TRANSPORT)
    if transport not in VALID_TRANSPORT_TYPES:
        errors.append(
            f"Invalid transport type. Must be one of: {', '.join(VALID_TRANSPORT_TYPES)}"
        )
    elif transport == "stdio":
        if not _is_non_empty_string(config.get("command")):
            errors.append("command is required for stdio transport")
        errors.extend(_validate_stdio_fields(config))
        if "url" in config:
            errors.append("URL is not valid for stdio transport")
        if "headers" in config:
            errors.append("Headers is not valid for stdio transport")
    else:
        if not _is_non_empty_string(config.get("url")):
            errors.append("url is required for http/sse transport")
        errors.extend(_validate_headers(config))
        errors.extend(
            f"{field.capitalize()} is not valid for http/sse transport"
            for field in STDIO_FIELDS
            if field in config
        )

    errors.extend(_validate_common_fields(config))
    return errors


def validate_mcp_update(updates: Any, existing: dict[str, Any]) -> list[str]:
    """Validate a partial update against the server it applies to.

    The effective transport is the updated type if one is given, otherwise
    the existing server's type.
    """
    if not isinstance(updates, dict):
        return ["Updates must be an object"]

    errors: list[str] = []
    new_type = updates.get("type")
    effective_type = new_type or existing.get("type") or DEFAULT_TRANSPORT

    if "type" in updates and new_type not in VALID_TRANSPORT_TYPES:
        errors.append(
            f"Invalid transport type. Must be one of: {', '.join(VALID_TRANSPORT_TYPES)}"
        )

    if effective_type == "stdio":
        if "command" in updates:
            if not _is_non_empty_string(updates["command"]):
                errors.append("Command must be a non-empty string for stdio transport")
        elif new_type == "stdio" and not existing.get("command"):
            errors.append("Command is required for stdio transport")
        errors.extend(_validate_stdio_fields(updates))
        if "url" in updates:
            errors.append("URL is not valid for stdio transport")
        if "headers" in updates:
            errors.append("Headers is not valid for stdio transport")

    elif effective_type in ("http", "sse"):
        if "url" in updates:
            if not _is_non_empty_string(updates["url"]):
                errors.append("URL must be a non-empty string for http/sse transport")
        elif new_type in ("http", "sse") and not existing.get("url"):
            errors.append("URL is required for http/sse transport")
        errors.extend(_validate_headers(updates))
        errors.extend(
            f"{field.capitalize()} is not valid for http/sse transport"
            for field in STDIO_FIELDS
            if field in updates
        )

    if "name" in updates:
        errors.extend(validate_server_name(updates["name"]))

    errors.extend(_validate_common_fields(updates))
    return errors


def apply_mcp_update(existing: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Apply allowed fields of an update to a server definition.

    Switching transport removes the fields the new transport doesn't accept.
    Unknown update fields are ignored; unknown existing fields are kept.

    Returns:
        New server definition
    """
    result = dict(existing)
    for field in UPDATABLE_FIELDS:
        if field in updates:
            result[field] = updates[field]

    new_type = updates.get("type")
    if new_type is not None and new_type != existing.get("type", DEFAULT_TRANSPORT):
        invalid = REMOTE_FIELDS if new_type == "stdio" else STDIO_FIELDS
        for field in invalid:
            result.pop(field, None)

    return result
