from __future__ import annotations

import types

import pytest

from spidevctl.core.controller import ConfigurationController
from spidevctl.core.driver import DriverError
from spidevctl.core.errors import DeviceOpenFailure, ParameterWriteFailure
from spidevctl.core.handle import DeviceHandle
from spidevctl.core.models import DeviceIdentity
from spidevctl.core.params import BitJustification, ParameterKind, SpiMode


class _SpiMock:
    """Mimics spidev.SpiDev attribute semantics."""

    missing: set[tuple[int, int]] = set()

    def __init__(self) -> None:
        self.mode = 0
        self.max_speed_hz = 125_000
        self._bits_per_word = 8
        self.lsbfirst = False
        self.closed = False

    def open(self, bus: int, dev: int) -> None:
        # the C extension converts both arguments to a C int
        for arg in (bus, dev):
            if not isinstance(arg, int):
                raise TypeError("an integer is required")
            if not -(2**31) <= arg < 2**31:
                raise OverflowError("signed integer is greater than maximum")
        if (bus, dev) in self.missing:
            raise FileNotFoundError(2, "No such file or directory")
        self.bus = bus
        self.dev = dev

    def close(self) -> None:
        self.closed = True

    @property
    def bits_per_word(self) -> int:
        return self._bits_per_word

    @bits_per_word.setter
    def bits_per_word(self, value: int) -> None:
        if not 8 <= value <= 16:
            raise TypeError("invalid bits_per_word (8 to 16)")
        self._bits_per_word = value


@pytest.fixture
def mod(monkeypatch: pytest.MonkeyPatch):  # type: ignore[no-untyped-def]
    from spidevctl.platform import spidev_driver as mod

    monkeypatch.setattr(mod, "spidev", types.SimpleNamespace(SpiDev=_SpiMock))
    _SpiMock.missing = set()
    return mod


def test_attributes_map_to_parameters(mod) -> None:  # type: ignore[no-untyped-def]
    drv = mod.SpidevDriver()
    spi = drv.open(0, 1)
    assert (spi.bus, spi.dev) == (0, 1)
    drv.set_mode(spi, 3)
    drv.set_speed(spi, 2_000_000)
    drv.set_bits_per_word(spi, 16)
    drv.set_bit_justification(spi, True)
    assert (spi.mode, spi.max_speed_hz, spi.bits_per_word, spi.lsbfirst) == (
        3,
        2_000_000,
        16,
        True,
    )
    assert drv.get_mode(spi) == 3
    assert drv.get_speed(spi) == 2_000_000
    assert drv.get_bits_per_word(spi) == 16
    assert drv.get_bit_justification(spi) is True
    drv.close(spi)
    assert spi.closed


def test_missing_node_raises_driver_error(mod) -> None:  # type: ignore[no-untyped-def]
    _SpiMock.missing = {(9, 9)}
    with pytest.raises(DriverError, match="spidev9.9"):
        mod.SpidevDriver().open(9, 9)


@pytest.mark.parametrize(
    "bus,cs,cause",
    [(2**32, 0, OverflowError), (0, 2**31, OverflowError), ("0", 0, TypeError)],
)
def test_unconvertible_index_raises_driver_error(mod, bus, cs, cause) -> None:
    with pytest.raises(DriverError) as ei:
        mod.SpidevDriver().open(bus, cs)
    assert isinstance(ei.value.__cause__, cause)


def test_handle_open_overflow(mod) -> None:  # type: ignore[no-untyped-def]
    # identity built without validation, as a caller bypassing parse could
    ident = DeviceIdentity.model_construct(bus=2**32, chip_select=0)
    h = DeviceHandle(mod.SpidevDriver(), ident)
    with pytest.raises(DeviceOpenFailure) as ei:
        h.open()
    assert isinstance(ei.value.__cause__, DriverError)
    assert not h.is_open


def test_kernel_rejection_is_driver_error(mod) -> None:  # type: ignore[no-untyped-def]
    drv = mod.SpidevDriver()
    spi = drv.open(0, 0)
    with pytest.raises(DriverError):
        drv.set_bits_per_word(spi, 24)


def test_without_spidev_module(monkeypatch: pytest.MonkeyPatch) -> None:
    from spidevctl.platform import spidev_driver as mod

    monkeypatch.setattr(mod, "spidev", None)
    ctl = ConfigurationController(mod.SpidevDriver())
    with pytest.raises(DeviceOpenFailure):
        ctl.initialize("0", "0")


def test_controller_over_spidev(mod) -> None:  # type: ignore[no-untyped-def]
    ctl = ConfigurationController(mod.SpidevDriver())
    summary = ctl.initialize("0", "0")
    assert summary[ParameterKind.MODE] is SpiMode.MODE_0
    assert summary[ParameterKind.SPEED] == 125_000
    assert summary[ParameterKind.BIT_JUSTIFICATION] is BitJustification.MSB_FIRST
    # in our domain but beyond what this controller accepts
    with pytest.raises(ParameterWriteFailure):
        ctl.apply(ParameterKind.BITS_PER_WORD, "32")
    assert ctl.get_current(ParameterKind.BITS_PER_WORD) == 8
    assert ctl.shutdown() is None
