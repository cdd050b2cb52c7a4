"""Configuration controller: the single entry point for callers.

The controller owns at most one :class:`DeviceHandle`. Requests are parsed
here (text -> typed value) and validated against the parameter domain by the
handle, so the driver only ever sees well-formed requests. Public operations
are serialized with a re-entrant lock; the driver is never called
concurrently for the same device.
"""

from __future__ import annotations

import logging
import threading
from types import TracebackType
from typing import Any

from .driver import SpiDriver
from .errors import (
    DeviceCloseFailure,
    DeviceNotOpen,
    InvalidParameterValue,
    ParameterReadFailure,
)
from .handle import DeviceHandle
from .models import DeviceIdentity, Summary
from .params import (
    DESCRIPTORS,
    REFRESH_ORDER,
    ParameterKind,
    format_value,
    parameter_kind,
)

logger = logging.getLogger(__name__)


class ConfigurationController:
    def __init__(self, driver: SpiDriver) -> None:
        self._driver = driver
        self._handle: DeviceHandle | None = None
        self._lock = threading.RLock()

    @property
    def identity(self) -> DeviceIdentity | None:
        return self._handle.identity if self._handle is not None else None

    @property
    def is_open(self) -> bool:
        return self._handle is not None and self._handle.is_open

    def _require_handle(self) -> DeviceHandle:
        if self._handle is None:
            raise DeviceNotOpen("no SPI device has been initialized")
        return self._handle

    # ------------------------------------------------------------------
    def initialize(self, bus: object, chip_select: object) -> Summary:
        """Open ``spidev<bus>.<chip_select>`` and read all parameters.

        An unparsable identity raises :class:`InvalidIdentity` and leaves the
        current handle untouched. Otherwise the current handle is closed
        before the new device is opened. Individual read failures are
        recorded in the returned :class:`Summary`.
        """
        identity = DeviceIdentity.parse(bus, chip_select)
        with self._lock:
            self._release()
            handle = DeviceHandle(self._driver, identity)
            handle.open()
            self._handle = handle
            return self._refresh(handle)

    def refresh_all(self) -> Summary:
        with self._lock:
            return self._refresh(self._require_handle())

    def _refresh(self, handle: DeviceHandle) -> Summary:
        summary = Summary(handle.identity)
        for kind in REFRESH_ORDER:
            try:
                summary.values[kind] = handle.get(kind)
            except ParameterReadFailure as e:
                logger.warning("%s: %s", handle.identity.name, e)
                summary.errors[kind] = e
        return summary

    def get_current(self, kind: ParameterKind | str) -> Any:
        with self._lock:
            return self._require_handle().get(kind)

    def apply(self, kind: ParameterKind | str, raw: object) -> None:
        """Convert *raw* (text, symbol or typed value) and write it."""
        kind = parameter_kind(kind)
        with self._lock:
            handle = self._require_handle()
            try:
                value = DESCRIPTORS[kind].parse(raw)
            except ValueError as e:
                raise InvalidParameterValue(kind, raw, str(e)) from None
            handle.set(kind, value)
            logger.info(
                "%s: %s set to %s",
                handle.identity.name,
                kind.label,
                format_value(value),
            )

    def close(self) -> DeviceCloseFailure | None:
        """Close the current device; raises :class:`DeviceNotOpen` without one."""
        with self._lock:
            self._require_handle()
            return self._release()

    def shutdown(self) -> DeviceCloseFailure | None:
        """Best-effort teardown. Never raises; safe to call repeatedly."""
        with self._lock:
            return self._release()

    def _release(self) -> DeviceCloseFailure | None:
        handle, self._handle = self._handle, None
        if handle is None:
            return None
        return handle.close()

    # ------------------------------------------------------------------
    def __enter__(self) -> "ConfigurationController":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()


__all__ = ["ConfigurationController"]
