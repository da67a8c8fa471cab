"""Append-only debug log shared by the app and the store clients."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path


class DebugLog:
    """Writes one timestamped line per event to a plain text file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def write(self, message: str) -> None:
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except OSError:
            # Logging must never interfere with app flow.
            return
