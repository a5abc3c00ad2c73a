"""
Title: Control-State Store
Author: Control Panel Engineering Team
Date Created: 2026-10-12
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Holds the flat mapping of control id to boolean or numeric value for every
operator control on the panel, and applies operator mutations atomically:
switch toggles, the mutually exclusive console selector group, dial writes,
and the internal corrective writes issued by the interlock monitor and the
ignition state machine.

Targeted Requirements:
- Toggles and dial writes are applied atomically; exactly one console selector
  is active at any time.

Scope and Limitations:
- Unknown ids are ignored; an operator can never create or destroy a control.
- Dial writes are stored exactly as given. Range enforcement belongs to the
  consumers that read the dials.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses, logging (standard library)
- control_catalog.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

import logging
from dataclasses import dataclass, field

from control_catalog import CONSOLE_SELECTORS, default_controls, is_dial, is_selector, is_switch

logger = logging.getLogger(__name__)


@dataclass
class ControlStore:
    values: dict[str, bool | float] = field(default_factory=default_controls)

    def get(self, control_id: str, default: bool | float = False) -> bool | float:
        return self.values.get(control_id, default)

    def is_on(self, control_id: str) -> bool:
        return self.values.get(control_id) is True

    def all_on(self, control_ids) -> bool:
        return all(self.is_on(cid) for cid in control_ids)

    def toggle(self, control_id: str) -> bool:
        # Returns True when the store changed.
        if not is_switch(control_id):
            logger.debug("Toggle ignored for non-switch control %r", control_id)
            return False

        if is_selector(control_id):
            # Radio group: re-selecting the active slot leaves it selected.
            for slot in CONSOLE_SELECTORS:
                self.values[slot] = slot == control_id
            return True

        self.values[control_id] = not self.is_on(control_id)
        return True

    def set_value(self, control_id: str, value: float) -> bool:
        if not is_dial(control_id):
            logger.debug("Set-value ignored for non-dial control %r", control_id)
            return False
        self.values[control_id] = float(value)
        return True

    def set_flag(self, control_id: str, value: bool) -> bool:
        # Corrective write; returns True only when the stored value changed.
        if not is_switch(control_id):
            return False
        value = bool(value)
        if self.values.get(control_id) is value:
            return False
        self.values[control_id] = value
        return True

    def reset(self) -> None:
        self.values = default_controls()

    def active_selector(self) -> str | None:
        for slot in CONSOLE_SELECTORS:
            if self.is_on(slot):
                return slot
        return None

    def snapshot(self) -> dict[str, bool | float]:
        return dict(self.values)
