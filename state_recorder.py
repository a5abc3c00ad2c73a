"""
Title: Game State Recorder
Author: Control Panel Engineering Team
Date Created: 2026-10-15
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Persists a single control panel snapshot to a JSON file and restores it on
start-up. Saves are stamped with `last_saved` from an injected clock. Loaded
snapshots are merged onto the initial state; malformed or unreadable files
degrade to the initial state instead of failing start-up. The navigation
command history is trimmed to the configured capacity on load.

Targeted Requirements:
- Malformed or unreadable snapshots degrade to the initial state.
- Save failures are reported as False and never raised.

Scope and Limitations:
- One snapshot per file, overwritten on each save; no history or versioning.
- Save failures are logged and reported as False, never raised.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- json, pathlib, logging (standard library)
- game_state.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable

from game_state import NAVIGATION_HISTORY_CAPACITY, GameState

logger = logging.getLogger(__name__)


class JsonStateStore:
    def __init__(
        self,
        filepath: str | Path,
        clock: Callable[[], float],
        history_capacity: int = NAVIGATION_HISTORY_CAPACITY,
    ):
        self._path = Path(filepath)
        self._clock = clock
        self._history_capacity = history_capacity

        # Ensures directory exists for persistence target.
        if self._path.parent:
            self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, base: GameState | None = None) -> GameState | None:
        if not self._path.exists():
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return GameState.from_dict(raw, base=base, history_capacity=self._history_capacity)
        except (OSError, ValueError, TypeError, KeyError, AttributeError):
            logger.exception("Failed to load panel state from %s", self._path)
            return None

    def load_or_initial(self, initial: Callable[[], GameState] = GameState.initial) -> GameState:
        state = self.load(base=initial())
        return state if state is not None else initial()

    def save(self, state: GameState) -> bool:
        return self.save_snapshot(state.to_dict())

    def save_snapshot(self, snapshot: dict[str, Any]) -> bool:
        payload = dict(snapshot)
        payload["last_saved"] = float(self._clock())
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp.replace(self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save panel state to %s", self._path)
            return False
        logger.debug("Panel state saved to %s", self._path)
        return True

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to clear panel state at %s", self._path)
