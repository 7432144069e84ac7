"""Blipp market - constant-product bonding-curve pricing for video share markets."""

__version__ = "0.1.0"
