"""Device handle: exclusive owner of one open spidev resource.

State machine::

    UNINITIALIZED --open()--> OPEN --close()--> CLOSED

``get``/``set`` require ``OPEN``. ``close`` on a ``CLOSED`` handle is a
no-op; there is no way back from ``CLOSED``.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import TracebackType
from typing import Any

from .driver import DriverError, SpiDriver
from .errors import (
    DeviceCloseFailure,
    DeviceNotOpen,
    DeviceOpenFailure,
    HandleStateError,
    InvalidParameterValue,
    ParameterReadFailure,
    ParameterWriteFailure,
)
from .models import DeviceIdentity
from .params import DESCRIPTORS, ParameterKind, format_value, parameter_kind

logger = logging.getLogger(__name__)

# Kernel ioctl failures surface as OSError from spidev-like drivers
_DRIVER_ERRORS = (DriverError, OSError)


class HandleState(Enum):
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class DeviceHandle:
    """Typed, validated access to a single SPI device through a driver."""

    def __init__(self, driver: SpiDriver, identity: DeviceIdentity) -> None:
        self._driver = driver
        self._identity = identity
        self._resource: Any = None
        self._state = HandleState.UNINITIALIZED
        # Values confirmed by a successful driver read or write
        self._last_known: dict[ParameterKind, Any] = {}

    @classmethod
    def open_device(
        cls, driver: SpiDriver, bus: object, chip_select: object
    ) -> "DeviceHandle":
        """Parse *bus*/*chip_select* and return an open handle.

        Identity errors are raised before the driver is touched.
        """
        handle = cls(driver, DeviceIdentity.parse(bus, chip_select))
        handle.open()
        return handle

    # ------------------------------------------------------------------
    @property
    def identity(self) -> DeviceIdentity:
        return self._identity

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is HandleState.OPEN

    @property
    def last_known(self) -> dict[ParameterKind, Any]:
        return dict(self._last_known)

    # ------------------------------------------------------------------
    def open(self) -> None:
        if self._state is not HandleState.UNINITIALIZED:
            raise HandleStateError(
                f"cannot open {self._identity.name}: handle is {self._state.value}"
            )
        bus, cs = self._identity.bus, self._identity.chip_select
        try:
            resource = self._driver.open(bus, cs)
        except _DRIVER_ERRORS as e:
            logger.error("failed to open %s: %s", self._identity.path, e)
            raise DeviceOpenFailure(bus, cs) from e
        self._resource = resource
        self._state = HandleState.OPEN
        logger.info("opened %s", self._identity.path)

    def _require_open(self) -> None:
        if self._state is not HandleState.OPEN:
            raise DeviceNotOpen(
                f"{self._identity.name} is not open (state={self._state.value})"
            )

    def get(self, kind: ParameterKind | str) -> Any:
        """Read *kind* from the driver and return its typed value."""
        kind = parameter_kind(kind)
        self._require_open()
        desc = DESCRIPTORS[kind]
        try:
            raw = getattr(self._driver, desc.getter)(self._resource)
        except _DRIVER_ERRORS as e:
            raise ParameterReadFailure(kind, str(e)) from e
        try:
            value = desc.decode(raw)
        except ValueError as e:
            raise ParameterReadFailure(
                kind, f"driver returned out-of-domain value {raw!r}"
            ) from e
        self._last_known[kind] = value
        logger.debug(
            "%s: %s -> %s", self._identity.name, kind.label, format_value(value)
        )
        return value

    def set(self, kind: ParameterKind | str, value: Any) -> None:
        """Validate *value* against the domain of *kind* and write it."""
        kind = parameter_kind(kind)
        self._require_open()
        desc = DESCRIPTORS[kind]
        try:
            value = desc.check(value)
        except ValueError as e:
            raise InvalidParameterValue(kind, value, str(e)) from None
        try:
            getattr(self._driver, desc.setter)(self._resource, desc.encode(value))
        except _DRIVER_ERRORS as e:
            raise ParameterWriteFailure(kind, str(e)) from e
        self._last_known[kind] = value
        logger.debug(
            "%s: %s <- %s", self._identity.name, kind.label, format_value(value)
        )

    def close(self) -> DeviceCloseFailure | None:
        """Release the driver resource.

        The handle always ends ``CLOSED``. A driver-side close failure is
        logged and returned instead of raised.
        """
        if self._state is HandleState.CLOSED:
            return None
        if self._state is HandleState.UNINITIALIZED:
            raise DeviceNotOpen(f"{self._identity.name} was never opened")
        resource, self._resource = self._resource, None
        self._state = HandleState.CLOSED
        self._last_known.clear()
        try:
            self._driver.close(resource)
        except _DRIVER_ERRORS as e:
            failure = DeviceCloseFailure(
                self._identity.bus, self._identity.chip_select, str(e)
            )
            failure.__cause__ = e
            logger.warning("%s", failure)
            return failure
        logger.info("closed %s", self._identity.path)
        return None

    # ------------------------------------------------------------------
    def __enter__(self) -> "DeviceHandle":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._state is HandleState.OPEN:
            self.close()

    def __repr__(self) -> str:  # pragma: no cover
        return f"DeviceHandle({self._identity.name}, {self._state.value})"


__all__ = ["DeviceHandle", "HandleState"]
