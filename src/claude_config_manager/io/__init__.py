from claude_config_manager.io.frontmatter import (
    FrontmatterResult,
    has_frontmatter_block,
    parse_frontmatter,
)
from claude_config_manager.io.json_document import (
    load_json_document,
    modify_json_document,
    save_json_document,
    write_bytes_atomic,
)

__all__ = [
    "FrontmatterResult",
    "has_frontmatter_block",
    "load_json_document",
    "modify_json_document",
    "parse_frontmatter",
    "save_json_document",
    "write_bytes_atomic",
]
