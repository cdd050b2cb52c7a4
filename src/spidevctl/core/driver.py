"""Contract consumed from the OS-level SPI device driver.

Values crossing this boundary are raw encodings: mode as an int 0..3,
speed and bits-per-word as ints, bit justification as an lsb-first bool.
Every call may block on I/O and may fail with :class:`DriverError` (or an
``OSError`` straight from the kernel). No call is assumed idempotent.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class DriverError(Exception):
    """Raised by driver implementations when the device rejects a request."""


@runtime_checkable
class SpiDriver(Protocol):  # pragma: no cover - typing only
    def open(self, bus: int, chip_select: int) -> Any:
        ...

    def close(self, resource: Any) -> None:
        ...

    def get_mode(self, resource: Any) -> int:
        ...

    def set_mode(self, resource: Any, mode: int) -> None:
        ...

    def get_speed(self, resource: Any) -> int:
        ...

    def set_speed(self, resource: Any, hz: int) -> None:
        ...

    def get_bits_per_word(self, resource: Any) -> int:
        ...

    def set_bits_per_word(self, resource: Any, bits: int) -> None:
        ...

    def get_bit_justification(self, resource: Any) -> bool:
        ...

    def set_bit_justification(self, resource: Any, lsb_first: bool) -> None:
        ...


__all__ = ["DriverError", "SpiDriver"]
