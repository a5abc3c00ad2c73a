# command_recorder.py
from __future__ import annotations

import csv
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

HEADER = ("timestamp", "command", "action", "accepted", "ship_status")


@dataclass
class CommandRecorder:
    """Append-only CSV trail of operator commands typed at the panel CLI."""

    filepath: Path
    clock: Callable[[], float]

    def __post_init__(self) -> None:
        self.filepath = Path(self.filepath)
        self._lock = threading.Lock()
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        if not self.filepath.exists():
            with self.filepath.open("w", encoding="utf-8", newline="") as f:
                csv.writer(f).writerow(HEADER)

    def record(
        self,
        *,
        command: str,
        action: str,
        accepted: bool,
        ship_status: str = "",
    ) -> None:
        row = (f"{self.clock():.6f}", command.strip(), action, accepted, ship_status)

        with self._lock:
            with self.filepath.open("a", encoding="utf-8", newline="") as f:
                csv.writer(f).writerow(row)
                f.flush()

    def rows(self) -> list[dict[str, str]]:
        with self._lock:
            with self.filepath.open("r", encoding="utf-8", newline="") as f:
                return list(csv.DictReader(f))
