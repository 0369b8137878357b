"""Server configuration from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration loaded from environment variables."""

    host: str
    port: int
    debug: bool
    home: Path
    dev_paths: bool

    @staticmethod
    def from_env() -> "ServerConfig":
        """Load configuration from environment variables."""
        home_override = os.environ.get("CLAUDE_CONFIG_HOME")
        return ServerConfig(
            host=os.environ.get("CLAUDE_CONFIG_HOST", "127.0.0.1"),
            port=int(os.environ.get("CLAUDE_CONFIG_PORT", "8420")),
            debug=os.environ.get("CLAUDE_CONFIG_DEBUG", "false").lower() == "true",
            home=Path(home_override) if home_override else Path.home(),
            dev_paths=os.environ.get("USE_DEV_PATHS", "false").lower() == "true",
        )
