"""Driver implementations for the SPI configuration core."""

from __future__ import annotations

from spidevctl.core.driver import SpiDriver

from .simulated import SimulatedDriver
from .spidev_driver import SpidevDriver

DRIVERS = ("spidev", "simulated")


def make_driver(name: str) -> SpiDriver:
    """Return a driver instance by name (``spidev`` or ``simulated``)."""
    if name == "spidev":
        return SpidevDriver()
    if name == "simulated":
        return SimulatedDriver()
    raise ValueError(f"unknown driver {name!r}: expected one of {', '.join(DRIVERS)}")


__all__ = ["DRIVERS", "SimulatedDriver", "SpidevDriver", "make_driver"]
