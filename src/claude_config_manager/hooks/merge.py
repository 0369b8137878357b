"""Operations for merging hooks into settings by event and matcher.

The ``hooks`` section of settings.json is a three-level tree::

    hooks -> event -> [matcher group] -> hooks -> [hook entry]

A matcher group without a ``matcher`` key is treated as the wildcard ``"*"``.
All functions here are pure: they take a settings document and return a new
one, leaving the input untouched.
"""

import copy
import logging
from typing import Any

from claude_config_manager.errors import ConflictError, NotFoundError
from claude_config_manager.hooks.events import WILDCARD_MATCHER, is_matcher_based_event

logger = logging.getLogger(__name__)

DEFAULT_HOOK_TYPE = "command"
DEFAULT_HOOK_TIMEOUT = 60

# Keys describing where a hook lives rather than what it does.
_LOCATION_KEYS = frozenset({"event", "matcher"})

# Fields of a stored entry that an update may change.
UPDATABLE_FIELDS = ("type", "command", "prompt", "timeout", "enabled", "suppressOutput", "continue")


def normalize_matcher(matcher: str | None) -> str:
    """Absent or blank matchers mean "all tools"."""
    if matcher is None or not matcher.strip():
        return WILDCARD_MATCHER
    return matcher


def group_matcher(group: dict[str, Any]) -> str:
    return normalize_matcher(group.get("matcher"))


def effective_matcher(event: str, matcher: str | None) -> tuple[str, str | None]:
    """Resolve the matcher a hook is stored under.

    Events without tool dispatch always use the wildcard; a specific matcher
    supplied for them is dropped and described by the returned warning.

    Returns:
        Tuple of (matcher, warning or None)
    """
    normalized = normalize_matcher(matcher)
    if is_matcher_based_event(event) or normalized == WILDCARD_MATCHER:
        return normalized, None

    warning = f'Matcher "{normalized}" ignored: {event} hooks do not support matchers'
    return WILDCARD_MATCHER, warning


def hook_identity(event: str, matcher: str | None, command: str) -> str:
    """Dedup key of a hook: ``event::matcher::command``."""
    return f"{event}::{normalize_matcher(matcher)}::{command}"


def find_matcher_group(groups: list[dict[str, Any]], matcher: str) -> int | None:
    """Find the index of the group whose normalized matcher equals ``matcher``."""
    for index, group in enumerate(groups):
        if isinstance(group, dict) and group_matcher(group) == matcher:
            return index
    return None


def _group_hooks(group: dict[str, Any]) -> list[Any]:
    hooks = group.get("hooks")
    return hooks if isinstance(hooks, list) else []


def is_duplicate_hook(group: dict[str, Any], command: str) -> bool:
    return any(
        isinstance(entry, dict) and entry.get("command") == command
        for entry in _group_hooks(group)
    )


def build_hook_entry(hook: dict[str, Any]) -> dict[str, Any]:
    """Build the stored hook entry, applying defaults for missing fields.

    Location keys (event, matcher) are not part of the entry.
    """
    entry: dict[str, Any] = {
        "type": hook.get("type", DEFAULT_HOOK_TYPE),
        "command": hook["command"],
        "enabled": hook.get("enabled", True),
        "timeout": hook.get("timeout", DEFAULT_HOOK_TIMEOUT),
    }
    for key, value in hook.items():
        if key not in entry and key not in _LOCATION_KEYS:
            entry[key] = value
    return entry


def find_hook(
    settings: dict[str, Any],
    event: str,
    matcher: str | None,
    command: str,
) -> dict[str, Any] | None:
    """Locate a hook entry by its identity.

    Returns:
        The stored entry, or None if no such hook exists
    """
    hooks = settings.get("hooks")
    if not isinstance(hooks, dict):
        return None

    groups = hooks.get(event)
    if not isinstance(groups, list):
        return None

    index = find_matcher_group(groups, normalize_matcher(matcher))
    if index is None:
        return None

    for entry in _group_hooks(groups[index]):
        if isinstance(entry, dict) and entry.get("command") == command:
            return entry
    return None


def merge_hook_into_settings(
    settings: dict[str, Any],
    event: str,
    matcher: str | None,
    hook: dict[str, Any],
) -> dict[str, Any]:
    """Add a hook to settings at the appropriate event and matcher group.

    Creates the event list and matcher group as needed. A hook whose command
    already exists in the target group is not added again; the existing entry
    keeps its enabled/timeout values.

    Args:
        settings: Current settings document
        event: Hook event (e.g. "PreToolUse")
        matcher: Tool matcher (e.g. "Bash"); None or "" means "*"
        hook: Hook definition; must contain ``command``

    Returns:
        New settings document with the hook merged in
    """
    stored_matcher, warning = effective_matcher(event, matcher)
    if warning is not None:
        logger.warning(warning)

    result = copy.deepcopy(settings)
    hooks = result.get("hooks")
    if not isinstance(hooks, dict):
        hooks = {}
        result["hooks"] = hooks

    groups = hooks.get(event)
    if not isinstance(groups, list):
        groups = []
        hooks[event] = groups

    matcher_based = is_matcher_based_event(event)
    index = find_matcher_group(groups, stored_matcher)

    if index is None:
        group: dict[str, Any] = {"matcher": stored_matcher} if matcher_based else {}
        group["hooks"] = []
        groups.append(group)
    else:
        group = groups[index]
        if is_duplicate_hook(group, hook["command"]):
            logger.debug(
                "Hook already present: %s", hook_identity(event, stored_matcher, hook["command"])
            )
            return result
        if matcher_based and "matcher" not in group:
            group = {"matcher": stored_matcher, **group}
            groups[index] = group

    if not isinstance(group.get("hooks"), list):
        group["hooks"] = []
    group["hooks"].append(build_hook_entry(hook))
    return result


def cleanup_empty_groups(settings: dict[str, Any]) -> dict[str, Any]:
    """Remove matcher groups with no hooks, then events with no groups.

    The ``hooks`` key itself is removed once it is empty.
    """
    result = copy.deepcopy(settings)
    hooks = result.get("hooks")
    if not isinstance(hooks, dict):
        return result

    cleaned: dict[str, Any] = {}
    for event, groups in hooks.items():
        if not isinstance(groups, list):
            cleaned[event] = groups
            continue
        non_empty = [g for g in groups if not isinstance(g, dict) or _group_hooks(g)]
        if non_empty:
            cleaned[event] = non_empty

    if cleaned:
        result["hooks"] = cleaned
    else:
        del result["hooks"]
    return result


def remove_hook_from_settings(
    settings: dict[str, Any],
    event: str,
    matcher: str | None,
    command: str,
) -> dict[str, Any]:
    """Remove one hook command and clean up the structures it leaves empty.

    Raises:
        NotFoundError: If the event, matcher group or command doesn't exist
    """
    normalized = normalize_matcher(matcher)
    identity = hook_identity(event, normalized, command)

    result = copy.deepcopy(settings)
    hooks = result.get("hooks")
    if not isinstance(hooks, dict):
        raise NotFoundError(f"Hook not found: {identity}")

    groups = hooks.get(event)
    if not isinstance(groups, list) or not groups:
        raise NotFoundError(f'Hook not found: no hooks configured for event "{event}"')

    index = find_matcher_group(groups, normalized)
    if index is None:
        raise NotFoundError(
            f'Hook not found: no matcher entry for "{normalized}" in event "{event}"'
        )

    group = groups[index]
    entries = _group_hooks(group)
    remaining = [e for e in entries if not (isinstance(e, dict) and e.get("command") == command)]
    if len(remaining) == len(entries):
        raise NotFoundError(f"Hook not found: {identity}")

    group["hooks"] = remaining
    return cleanup_empty_groups(result)


def update_hook_in_settings(
    settings: dict[str, Any],
    event: str,
    matcher: str | None,
    command: str,
    updates: dict[str, Any],
) -> tuple[dict[str, Any], str, dict[str, Any]]:
    """Apply a partial update to one hook.

    A changed matcher moves the entry to that matcher's group (created if
    needed) and drops the group it leaves if that one is now empty. The event
    never changes.

    Returns:
        Tuple of (new settings document, stored matcher, updated entry)

    Raises:
        NotFoundError: If the hook doesn't exist
        ConflictError: If the updated hook would duplicate another one
    """
    normalized = normalize_matcher(matcher)
    if find_hook(settings, event, normalized, command) is None:
        raise NotFoundError(f"Hook not found: {hook_identity(event, normalized, command)}")

    new_matcher = normalized
    if is_matcher_based_event(event) and updates.get("matcher") is not None:
        new_matcher = normalize_matcher(updates["matcher"])

    result = copy.deepcopy(settings)
    groups = result["hooks"][event]
    old_group = groups[find_matcher_group(groups, normalized)]
    entries = _group_hooks(old_group)
    position = next(
        i for i, e in enumerate(entries) if isinstance(e, dict) and e.get("command") == command
    )

    entry = dict(entries[position])
    for key in UPDATABLE_FIELDS:
        if key in updates:
            entry[key] = updates[key]
    new_command = entry.get("command", command)

    if (new_matcher, new_command) != (normalized, command) and (
        find_hook(settings, event, new_matcher, new_command) is not None
    ):
        raise ConflictError(
            f"Hook already exists: {hook_identity(event, new_matcher, new_command)}"
        )

    if new_matcher == normalized:
        entries[position] = entry
        return result, new_matcher, entry

    del entries[position]
    index = find_matcher_group(groups, new_matcher)
    if index is None:
        groups.append({"matcher": new_matcher, "hooks": [entry]})
    else:
        target = groups[index]
        if not isinstance(target.get("hooks"), list):
            target["hooks"] = []
        target["hooks"].append(entry)
    return cleanup_empty_groups(result), new_matcher, entry
