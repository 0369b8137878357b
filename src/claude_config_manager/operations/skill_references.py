"""Detect references from a skill's SKILL.md to files outside the skill.

A skill is copied as a self-contained directory; anything it reaches outside
of that directory will not travel with it.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_URL_PATTERN = re.compile(r"^(?:https?|ftp)://")


@dataclass(frozen=True)
class ReferencePattern:
    regex: re.Pattern[str]
    type: str
    severity: str


REFERENCE_PATTERNS: tuple[ReferencePattern, ...] = (
    ReferencePattern(re.compile(r"(?:^|\s)(/[^\s'\"<>]+)"), "absolute", "error"),
    ReferencePattern(re.compile(r"(?:^|\s)(~/[^\s'\"<>]+)"), "home", "warning"),
    ReferencePattern(re.compile(r"(?:^|\s)(\.\.[/\\][^\s'\"<>]*)"), "relative", "warning"),
    ReferencePattern(
        re.compile(r"(?:node|python|bash|sh)\s+([~./][^\s'\"<>]+)", re.IGNORECASE),
        "script",
        "error",
    ),
)


@dataclass(frozen=True)
class ExternalReference:
    """A path in SKILL.md that points outside the skill directory."""

    file: str
    line: int
    reference: str
    type: str
    severity: str

    def to_response(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "reference": self.reference,
            "type": self.type,
            "severity": self.severity,
        }


def _is_inside(reference: str, skill_dir: Path) -> bool:
    # Home references can't be checked against the skill directory.
    if reference.startswith("~"):
        return False
    resolved = Path(os.path.normpath(skill_dir / reference))
    return resolved.is_relative_to(Path(os.path.normpath(skill_dir)))


def detect_external_references(
    skill_dir: Path,
    content: str,
    file_name: str = "SKILL.md",
) -> list[ExternalReference]:
    """Scan ``content`` line by line for paths leaving ``skill_dir``.

    Absolute paths and script invocations are errors; home-relative paths
    and parent-directory escapes are warnings. URLs are ignored.
    """
    references: list[ExternalReference] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        for pattern in REFERENCE_PATTERNS:
            for match in pattern.regex.finditer(line):
                reference = match.group(1)
                if _URL_PATTERN.match(reference) or _is_inside(reference, skill_dir):
                    continue
                references.append(
                    ExternalReference(
                        file=file_name,
                        line=line_number,
                        reference=reference,
                        type=pattern.type,
                        severity=pattern.severity,
                    )
                )
    return references
