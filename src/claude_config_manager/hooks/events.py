"""Hook event metadata.

Single source of truth for which events exist, which of them dispatch on a
tool matcher, and which accept ``prompt`` hooks.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HookEventInfo:
    """Capabilities of a hook event."""

    name: str
    has_matcher: bool
    supports_prompt: bool


HOOK_EVENTS: dict[str, HookEventInfo] = {
    info.name: info
    for info in (
        HookEventInfo("PreToolUse", has_matcher=True, supports_prompt=True),
        HookEventInfo("PostToolUse", has_matcher=True, supports_prompt=False),
        HookEventInfo("Notification", has_matcher=False, supports_prompt=False),
        HookEventInfo("UserPromptSubmit", has_matcher=False, supports_prompt=True),
        HookEventInfo("Stop", has_matcher=False, supports_prompt=True),
        HookEventInfo("SubagentStop", has_matcher=False, supports_prompt=True),
        HookEventInfo("PreCompact", has_matcher=False, supports_prompt=False),
        HookEventInfo("SessionStart", has_matcher=False, supports_prompt=False),
        HookEventInfo("SessionEnd", has_matcher=False, supports_prompt=False),
    )
}

VALID_HOOK_EVENTS: tuple[str, ...] = tuple(HOOK_EVENTS)
MATCHER_BASED_EVENTS: frozenset[str] = frozenset(
    name for name, info in HOOK_EVENTS.items() if info.has_matcher
)
PROMPT_SUPPORTED_EVENTS: tuple[str, ...] = tuple(
    name for name, info in HOOK_EVENTS.items() if info.supports_prompt
)
VALID_HOOK_TYPES: tuple[str, ...] = ("command", "prompt")

WILDCARD_MATCHER = "*"


def is_valid_event(event: str) -> bool:
    return event in HOOK_EVENTS


def is_matcher_based_event(event: str) -> bool:
    return event in MATCHER_BASED_EVENTS


def supports_prompt_type(event: str) -> bool:
    return event in PROMPT_SUPPORTED_EVENTS
