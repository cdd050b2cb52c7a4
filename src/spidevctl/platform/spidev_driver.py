"""Linux spidev driver backed by the ``spidev`` extension module.

Each open resource is a ``spidev.SpiDev`` instance. Parameters map onto its
attributes (``mode``, ``max_speed_hz``, ``bits_per_word``, ``lsbfirst``);
the attribute setters issue the corresponding SPI_IOC_WR_* ioctls and raise
``OSError`` when the kernel rejects a value.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from spidevctl.core.driver import DriverError

try:  # pragma: no cover - optional hardware
    import spidev
except Exception:  # pragma: no cover
    spidev = None

logger = logging.getLogger(__name__)


@runtime_checkable
class _SpiLike(Protocol):  # pragma: no cover - typing only
    mode: int
    max_speed_hz: int
    bits_per_word: int
    lsbfirst: bool

    def open(self, bus: int, dev: int) -> None:
        ...

    def close(self) -> None:
        ...


class SpidevDriver:
    """Driver Interface implementation for ``/dev/spidevB.C`` nodes."""

    def open(self, bus: int, chip_select: int) -> _SpiLike:
        if spidev is None:
            raise DriverError("spidev module is not available on this system")
        spi = spidev.SpiDev()
        try:
            spi.open(bus, chip_select)
        except (OSError, OverflowError, TypeError, ValueError) as e:
            raise DriverError(f"/dev/spidev{bus}.{chip_select}: {e}") from e
        logger.debug("spidev%d.%d opened", bus, chip_select)
        return spi

    def close(self, resource: _SpiLike) -> None:
        try:
            resource.close()
        except OSError as e:
            raise DriverError(str(e)) from e

    @staticmethod
    def _read(resource: _SpiLike, attr: str) -> Any:
        try:
            return getattr(resource, attr)
        except OSError as e:
            raise DriverError(f"reading {attr}: {e}") from e

    @staticmethod
    def _write(resource: _SpiLike, attr: str, value: Any) -> None:
        try:
            setattr(resource, attr, value)
        except (OSError, TypeError, ValueError) as e:
            raise DriverError(f"writing {attr}={value!r}: {e}") from e

    def get_mode(self, resource: _SpiLike) -> int:
        return self._read(resource, "mode")

    def set_mode(self, resource: _SpiLike, mode: int) -> None:
        self._write(resource, "mode", mode)

    def get_speed(self, resource: _SpiLike) -> int:
        return self._read(resource, "max_speed_hz")

    def set_speed(self, resource: _SpiLike, hz: int) -> None:
        self._write(resource, "max_speed_hz", hz)

    def get_bits_per_word(self, resource: _SpiLike) -> int:
        return self._read(resource, "bits_per_word")

    def set_bits_per_word(self, resource: _SpiLike, bits: int) -> None:
        self._write(resource, "bits_per_word", bits)

    def get_bit_justification(self, resource: _SpiLike) -> bool:
        return bool(self._read(resource, "lsbfirst"))

    def set_bit_justification(self, resource: _SpiLike, lsb_first: bool) -> None:
        self._write(resource, "lsbfirst", bool(lsb_first))


__all__ = ["SpidevDriver"]
