"""
Toolbox configuration.

Loaded from environment variables (.env) or constructed in code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from droid_tools_sdk.builtin import BUILTIN_TOOLS


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_list(value: Optional[str], default: List[str]) -> List[str]:
    if value is None or not value.strip():
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ToolboxConfig:
    """Toolbox runtime configuration."""

    # ── Tools ──
    tools: List[str] = field(default_factory=lambda: list(BUILTIN_TOOLS))
    storage_root: str = field(default_factory=os.getcwd)

    # ── Debug ──
    debug: bool = False
    log_file: str = ""
    log_level: str = ""

    @classmethod
    def from_env(cls, env_file: str = ".env") -> ToolboxConfig:
        """
        Load configuration from a .env file and the environment.

        Environment variables take precedence over the .env file.
        """
        load_dotenv(env_file, override=False)

        return cls(
            tools=_to_list(os.getenv("DROID_TOOLS"), BUILTIN_TOOLS),
            storage_root=os.getenv("DROID_STORAGE_ROOT", "").strip() or os.getcwd(),
            debug=_to_bool(os.getenv("DEBUG")),
            log_file=os.getenv("LOG_FILE", "").strip(),
            log_level=os.getenv("LOG_LEVEL", "").strip().upper(),
        )

    def summary(self) -> str:
        """Return a short configuration summary."""
        return (
            f"Tools: {', '.join(self.tools) or 'none'}\n"
            f"Storage root: {self.storage_root}\n"
            f"Log file: {self.log_file or 'stderr only'}\n"
            f"SDK log level: {self.log_level or 'same as root'}\n"
            f"Debug: {self.debug}"
        )
