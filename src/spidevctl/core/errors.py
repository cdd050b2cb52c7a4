"""Error taxonomy for SPI device configuration.

Validation errors (:class:`InvalidIdentity`, :class:`InvalidParameterValue`)
are raised before any driver call. Driver-originated errors keep the
underlying driver exception as ``__cause__``. :class:`DeviceCloseFailure` is
returned by close operations rather than raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .params import ParameterKind


class SpiConfigError(Exception):
    """Base class for every error reported by the configuration core."""


class InvalidIdentity(SpiConfigError):
    """Bus or chip select text is not a non-negative integer."""

    def __init__(self, bus: object, chip_select: object, reason: str = "") -> None:
        self.bus = bus
        self.chip_select = chip_select
        msg = f"invalid SPI device identity bus={bus!r} chip_select={chip_select!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DeviceOpenFailure(SpiConfigError):
    def __init__(self, bus: int, chip_select: int) -> None:
        self.bus = bus
        self.chip_select = chip_select
        super().__init__(f"error opening /dev/spidev{bus}.{chip_select}")


class DeviceNotOpen(SpiConfigError):
    def __init__(self, msg: str = "SPI device is not open") -> None:
        super().__init__(msg)


class HandleStateError(SpiConfigError):
    """A handle was asked to open from a state other than uninitialized."""


class UnknownParameter(SpiConfigError):
    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"unknown SPI parameter {name!r}")


class _ParameterError(SpiConfigError):
    action = "access"

    def __init__(self, kind: ParameterKind, detail: str = "") -> None:
        self.kind = kind
        msg = f"error trying to {self.action} SPI {kind.label}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class InvalidParameterValue(_ParameterError):
    action = "validate"

    def __init__(self, kind: ParameterKind, value: object, detail: str = "") -> None:
        self.value = value
        super().__init__(kind, detail or f"{value!r} is out of range")


class ParameterReadFailure(_ParameterError):
    action = "read"


class ParameterWriteFailure(_ParameterError):
    action = "write"


class DeviceCloseFailure(SpiConfigError):
    def __init__(self, bus: int, chip_select: int, detail: str = "") -> None:
        self.bus = bus
        self.chip_select = chip_select
        msg = f"error closing /dev/spidev{bus}.{chip_select}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


__all__ = [
    "SpiConfigError",
    "InvalidIdentity",
    "DeviceOpenFailure",
    "DeviceNotOpen",
    "HandleStateError",
    "UnknownParameter",
    "InvalidParameterValue",
    "ParameterReadFailure",
    "ParameterWriteFailure",
    "DeviceCloseFailure",
]
