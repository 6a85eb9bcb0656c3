"""Accessory layer.

This package is the single place where bridge state is translated into
accessory surface values, both for pushed/polled snapshots
(:class:`StateReconciler`) and for host-driven actions
(:class:`ActionDispatcher`).
"""

from pynukilatch.accessory.dispatcher import ActionDispatcher
from pynukilatch.accessory.reconciler import StateReconciler
from pynukilatch.accessory.surfaces import (
    AccessoryContext,
    BatterySurface,
    ContactSensorSurface,
    LockMechanismSurface,
)

__all__ = [
    "AccessoryContext",
    "ActionDispatcher",
    "BatterySurface",
    "ContactSensorSurface",
    "LockMechanismSurface",
    "StateReconciler",
]
