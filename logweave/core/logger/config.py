"""
Settings for logweave's own diagnostics (appender setup, rotations, I/O failures).
"""
from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Optional

DIAGNOSTICS_LOGGER = "logweave"
DIAGNOSTICS_FILE = "logweave-diagnostics.log"


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    How the ``logweave`` logger reports. Build explicitly or via from_env().

    The defaults keep the library quiet: WARNING and above on stderr, nothing
    forwarded to the host application's root logger.
    """

    level: str = "WARNING"
    # JSON Lines file "<log_dir>/logweave-diagnostics.log"; skipped when None
    log_dir: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3
    console: bool = True
    # Also hand records to the host's root logger
    propagate: bool = False

    @classmethod
    def from_env(cls) -> "DiagnosticsConfig":
        """Read LOGWEAVE_SELF_LEVEL, _LOG_DIR, _MAX_BYTES, _BACKUP_COUNT, _CONSOLE, _PROPAGATE."""
        return cls(
            level=os.environ.get("LOGWEAVE_SELF_LEVEL", "WARNING").strip().upper(),
            log_dir=os.environ.get("LOGWEAVE_SELF_LOG_DIR") or None,
            max_bytes=int(os.environ.get("LOGWEAVE_SELF_MAX_BYTES", "1048576")),
            backup_count=int(os.environ.get("LOGWEAVE_SELF_BACKUP_COUNT", "3")),
            console=_flag("LOGWEAVE_SELF_CONSOLE", "true"),
            propagate=_flag("LOGWEAVE_SELF_PROPAGATE", "false"),
        )

    def with_overrides(self, **changes: object) -> "DiagnosticsConfig":
        """Copy with the given fields replaced; None values are ignored."""
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    @property
    def file_path(self) -> Optional[str]:
        if not self.log_dir or not self.log_dir.strip():
            return None
        return os.path.join(self.log_dir, DIAGNOSTICS_FILE)
