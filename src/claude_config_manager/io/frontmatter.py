"""Frontmatter parsing for agent, command and skill Markdown files."""

import logging
import re
from dataclasses import dataclass
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Opening delimiter on the first line, closing delimiter on its own line.
# The block between them may be empty.
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


@dataclass(frozen=True)
class FrontmatterResult:
    """Parsed Markdown document.

    Attributes:
        frontmatter: Mapping from the YAML block, or None if there is no block
        body: Markdown content after the closing delimiter
        has_error: The block exists but is not a valid YAML mapping
        parse_error: YAML error message when has_error is set
    """

    frontmatter: dict[str, Any] | None
    body: str
    has_error: bool = False
    parse_error: str | None = None

    @property
    def has_frontmatter(self) -> bool:
        return self.frontmatter is not None or self.has_error


def has_frontmatter_block(content: str) -> bool:
    """Check for a well-formed ``---`` delimited block at the top of the file."""
    return FRONTMATTER_PATTERN.match(content) is not None


def parse_frontmatter(content: str) -> FrontmatterResult:
    """Split Markdown content into its YAML frontmatter and body.

    Missing or unterminated blocks yield ``frontmatter=None`` with the whole
    content as body. Invalid YAML is reported through ``has_error`` rather
    than raised.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return FrontmatterResult(frontmatter=None, body=content)

    body = content[match.end() :]
    yaml_content = match.group(1) or ""

    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML frontmatter: %s", e)
        return FrontmatterResult(frontmatter=None, body=body, has_error=True, parse_error=str(e))

    if data is None:
        return FrontmatterResult(frontmatter={}, body=body)

    if not isinstance(data, dict):
        return FrontmatterResult(
            frontmatter=None,
            body=body,
            has_error=True,
            parse_error="Frontmatter must be a YAML mapping",
        )

    return FrontmatterResult(frontmatter=data, body=body)
