"""
Title: Panel Notification Events
Author: Control Panel Engineering Team
Date Created: 2026-10-15
Last Modified: 2026-10-15
Version: 1.0

Purpose:
Fire-and-forget named events raised by the controller for collaborators such
as an audio cue player. The sink is injected; a failing sink is logged and
never propagates into the control path.

Targeted Requirements:
- Ship, engine and heartbeat transitions are published to an injected sink.

Dependencies:
- Python 3.10+
- enum, logging (standard library)
- control_catalog.py
"""

import logging
from enum import Enum, auto
from typing import Any, Callable

from control_catalog import BATTERY_TOGGLES, FOOTER_TOGGLES

logger = logging.getLogger(__name__)


class NotificationEvent(Enum):
    MASTER_POWER_TOGGLED = auto()
    MAIN_POWER_TOGGLED = auto()
    BACKUP_POWER_TOGGLED = auto()
    CONSOLE_POWER_TOGGLED = auto()
    SHIP_ONLINE = auto()
    ENGINE_READY = auto()
    ENGINE_IGNITION_CYCLE = auto()
    ENGINE_ONLINE = auto()
    ENGINE_HEARTBEAT = auto()


NotificationSink = Callable[[NotificationEvent, dict[str, Any]], None]


def logging_sink(event: NotificationEvent, payload: dict[str, Any]) -> None:
    logger.debug("Notification %s %s", event.name, payload)


class Notifier:
    def __init__(self, sink: NotificationSink | None = None):
        self._sink = sink if sink is not None else logging_sink

    def notify(self, event: NotificationEvent, **payload: Any) -> None:
        try:
            self._sink(event, payload)
        except Exception:
            logger.exception("Notification sink failed for %s", event.name)


def toggle_event(control_id: str) -> NotificationEvent | None:
    if control_id in ("master-toggle", "engine-master", "comms-master"):
        return NotificationEvent.MASTER_POWER_TOGGLED
    if control_id in ("pwr-1", "pwr-2"):
        return NotificationEvent.MAIN_POWER_TOGGLED
    if control_id.startswith("pwr-"):
        return NotificationEvent.BACKUP_POWER_TOGGLED
    if control_id in _CONSOLE_POWER_CONTROLS or control_id in FOOTER_TOGGLES:
        return NotificationEvent.CONSOLE_POWER_TOGGLED
    return None


_CONSOLE_POWER_CONTROLS = frozenset((
    "engine-pwr-1", "engine-pwr-2", "engine-ready-1", "engine-ready-2",
    "comms-pwr-1", "comms-pwr-2", *BATTERY_TOGGLES,
))
