"""Validation of hook definitions before they are merged into settings."""

from typing import Any

from claude_config_manager.hooks.events import (
    PROMPT_SUPPORTED_EVENTS,
    VALID_HOOK_EVENTS,
    VALID_HOOK_TYPES,
    WILDCARD_MATCHER,
    is_matcher_based_event,
    is_valid_event,
    supports_prompt_type,
)

BOOLEAN_FIELDS = ("enabled", "suppressOutput", "continue")


def _is_positive_int(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_hook(hook: Any, event: str | None = None) -> list[str]:
    """Validate a hook definition and return every rule violation.

    Args:
        hook: Hook mapping (type, command, timeout, enabled, ...)
        event: Event the hook belongs to; falls back to ``hook["event"]``

    Returns:
        List of error messages, empty if the hook is valid
    """
    if not isinstance(hook, dict):
        return ["Hook must be an object"]

    errors: list[str] = []

    event = event or hook.get("event")
    if not event:
        errors.append("Event type is required")
    elif not isinstance(event, str):
        errors.append("Event type must be a string")
        event = None
    elif not is_valid_event(event):
        errors.append(
            f'Invalid event type: "{event}". Valid events: {", ".join(VALID_HOOK_EVENTS)}'
        )

    matcher = hook.get("matcher")
    if matcher is not None and not isinstance(matcher, str):
        errors.append("Matcher must be a string")

    hook_type = hook.get("type", "command")
    if hook_type not in VALID_HOOK_TYPES:
        errors.append(f'Invalid hook type: "{hook_type}". Valid types: command, prompt')
    elif hook_type == "prompt" and event and is_valid_event(event):
        if not supports_prompt_type(event):
            errors.append(
                f'Type "prompt" is only supported for {", ".join(PROMPT_SUPPORTED_EVENTS)} events'
            )

    if hook_type == "command":
        command = hook.get("command")
        if not isinstance(command, str) or not command.strip():
            errors.append("Command is required for command-type hooks")

    if "timeout" in hook and not _is_positive_int(hook["timeout"]):
        errors.append("Timeout must be a positive integer")

    for field_name in BOOLEAN_FIELDS:
        if field_name in hook and not isinstance(hook[field_name], bool):
            errors.append(f"{field_name} must be a boolean value")

    return errors


def validate_hook_update(updates: Any, existing: dict[str, Any], event: str) -> list[str]:
    """Validate a partial update to an existing hook.

    The event is fixed once a hook is created. A matcher may be changed only
    for tool events, and never to an empty value.
    """
    if not isinstance(updates, dict):
        return ["Updates must be a non-null object"]

    errors: list[str] = []

    if "event" in updates and updates["event"] != event:
        errors.append("Event type cannot be changed after hook creation")

    if "matcher" in updates:
        matcher = updates["matcher"]
        if not is_matcher_based_event(event):
            if matcher not in (None, "", WILDCARD_MATCHER):
                errors.append(f"{event} hooks do not support matchers")
        elif not isinstance(matcher, str) or not matcher.strip():
            errors.append("Matcher cannot be empty for matcher-based events")

    hook_type = updates.get("type", existing.get("type", "command"))
    if "type" in updates:
        if hook_type not in VALID_HOOK_TYPES:
            errors.append(f'Invalid hook type: "{hook_type}". Valid types: command, prompt')
        elif hook_type == "prompt" and not supports_prompt_type(event):
            errors.append(
                f'Type "prompt" is only supported for {", ".join(PROMPT_SUPPORTED_EVENTS)} events'
            )

    if "command" in updates and hook_type == "command":
        command = updates["command"]
        if not isinstance(command, str) or not command.strip():
            errors.append("Command cannot be empty for command-type hooks")

    if "timeout" in updates and not _is_positive_int(updates["timeout"]):
        errors.append("Timeout must be a positive integer")

    for field_name in BOOLEAN_FIELDS:
        if field_name in updates and not isinstance(updates[field_name], bool):
            errors.append(f"{field_name} must be a boolean value")

    return errors
