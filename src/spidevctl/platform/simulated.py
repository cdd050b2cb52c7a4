"""In-memory SPI driver for dry runs and tests.

Every address holds a :class:`SimulatedDevice` whose register state
persists across open/close cycles, mirroring how the kernel keeps the
spidev configuration between file descriptors. Initial values come from
``simulated_device`` in ``values.yml``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from spidevctl.core.driver import DriverError
from spidevctl.settings.values import SIMULATED_DEVICE_DEFAULTS

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulatedDevice:
    bus: int
    chip_select: int
    mode: int = 0
    speed_hz: int = 500_000
    bits_per_word: int = 8
    lsb_first: bool = False
    open_count: int = 0


@dataclass(slots=True)
class SimulatedResource:
    device: SimulatedDevice
    closed: bool = False


class SimulatedDriver:
    """Driver Interface implementation with no hardware behind it.

    ``addresses`` restricts which ``(bus, chip_select)`` pairs exist; when
    omitted every address can be opened.
    """

    def __init__(
        self,
        addresses: Iterable[tuple[int, int]] | None = None,
        *,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        self._addresses = set(addresses) if addresses is not None else None
        self._defaults = dict(SIMULATED_DEVICE_DEFAULTS)
        if defaults:
            self._defaults.update(defaults)
        self._devices: dict[tuple[int, int], SimulatedDevice] = {}

    def device(self, bus: int, chip_select: int) -> SimulatedDevice:
        key = (bus, chip_select)
        dev = self._devices.get(key)
        if dev is None:
            dev = SimulatedDevice(
                bus=bus,
                chip_select=chip_select,
                mode=self._defaults["mode"],
                speed_hz=self._defaults["speed_hz"],
                bits_per_word=self._defaults["bits_per_word"],
                lsb_first=self._defaults["lsb_first"],
            )
            self._devices[key] = dev
        return dev

    @staticmethod
    def _live(resource: SimulatedResource) -> SimulatedDevice:
        if resource.closed:
            raise DriverError("bad file descriptor")
        return resource.device

    def open(self, bus: int, chip_select: int) -> SimulatedResource:
        if self._addresses is not None and (bus, chip_select) not in self._addresses:
            raise DriverError(f"/dev/spidev{bus}.{chip_select}: no such device")
        dev = self.device(bus, chip_select)
        dev.open_count += 1
        logger.debug("simulated spidev%d.%d opened", bus, chip_select)
        return SimulatedResource(dev)

    def close(self, resource: SimulatedResource) -> None:
        dev = self._live(resource)
        resource.closed = True
        dev.open_count -= 1

    def get_mode(self, resource: SimulatedResource) -> int:
        return self._live(resource).mode

    def set_mode(self, resource: SimulatedResource, mode: int) -> None:
        self._live(resource).mode = mode

    def get_speed(self, resource: SimulatedResource) -> int:
        return self._live(resource).speed_hz

    def set_speed(self, resource: SimulatedResource, hz: int) -> None:
        self._live(resource).speed_hz = hz

    def get_bits_per_word(self, resource: SimulatedResource) -> int:
        return self._live(resource).bits_per_word

    def set_bits_per_word(self, resource: SimulatedResource, bits: int) -> None:
        self._live(resource).bits_per_word = bits

    def get_bit_justification(self, resource: SimulatedResource) -> bool:
        return self._live(resource).lsb_first

    def set_bit_justification(
        self, resource: SimulatedResource, lsb_first: bool
    ) -> None:
        self._live(resource).lsb_first = lsb_first


__all__ = ["SimulatedDevice", "SimulatedDriver", "SimulatedResource"]
