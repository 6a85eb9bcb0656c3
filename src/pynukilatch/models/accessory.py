"""Accessory characteristic values.

Values follow the HomeKit characteristic definitions used by the
accessory host (``LockCurrentState``/``LockTargetState``,
``ContactSensorState``, ``StatusLowBattery``, ``ChargingState``).
"""

from __future__ import annotations

import enum


class LockSurfaceState(enum.IntEnum):
    """Target/current state of a lock mechanism surface."""

    UNSECURED = 0
    SECURED = 1
    JAMMED = 2
    UNKNOWN = 3


class ContactState(enum.IntEnum):
    DETECTED = 0
    NOT_DETECTED = 1


class LowBatteryStatus(enum.IntEnum):
    NORMAL = 0
    LOW = 1


class ChargingState(enum.IntEnum):
    NOT_CHARGING = 0
    CHARGING = 1
