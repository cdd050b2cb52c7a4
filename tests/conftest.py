from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Callable

import pytest

from spidevctl.core.controller import ConfigurationController
from spidevctl.core.driver import DriverError
from spidevctl.platform.simulated import SimulatedDriver

DRIVER_METHODS = (
    "open",
    "close",
    "get_mode",
    "set_mode",
    "get_speed",
    "set_speed",
    "get_bits_per_word",
    "set_bits_per_word",
    "get_bit_justification",
    "set_bit_justification",
)

DEVICE_DEFAULTS = {
    "mode": 0,
    "speed_hz": 500_000,
    "bits_per_word": 8,
    "lsb_first": False,
}


class RecordingDriver:
    """Wraps a SimulatedDriver, counting calls and injecting failures.

    ``fail`` holds method names that raise DriverError; ``returns`` maps
    method names to a raw value returned instead of the simulated one.
    """

    def __init__(self, inner: SimulatedDriver | None = None) -> None:
        self.inner = inner if inner is not None else SimulatedDriver(
            defaults=DEVICE_DEFAULTS
        )
        self.calls: Counter[str] = Counter()
        self.log: list[tuple[str, tuple[Any, ...]]] = []
        self.fail: set[str] = set()
        self.returns: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name not in DRIVER_METHODS:
            raise AttributeError(name)
        target = getattr(self.inner, name)

        def _call(*args: Any) -> Any:
            self.calls[name] += 1
            self.log.append((name, args))
            if name in self.fail:
                raise DriverError(f"injected {name} failure")
            if name in self.returns:
                return self.returns[name]
            return target(*args)

        return _call


@pytest.fixture
def driver() -> RecordingDriver:
    return RecordingDriver()


@pytest.fixture
def controller(driver: RecordingDriver) -> ConfigurationController:
    return ConfigurationController(driver)


@pytest.fixture
def spidevctl_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("SPIDEVCTL_HOME", str(tmp_path))
    return tmp_path
