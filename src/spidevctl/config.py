"""Runtime configuration helpers.

Merges the persisted :class:`~spidevctl.settings.schema.Settings` with CLI
overrides into the :class:`RuntimeConfig` consumed by :mod:`spidevctl.cli`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .core.params import ParameterKind
from .settings.schema import Settings
from .settings.store import SettingsStore

# argparse destination -> parameter written by that flag
_PARAM_ARGS = {
    "mode": ParameterKind.MODE,
    "speed": ParameterKind.SPEED,
    "bpw": ParameterKind.BITS_PER_WORD,
    "bit_just": ParameterKind.BIT_JUSTIFICATION,
}


@dataclass(slots=True)
class RuntimeConfig:
    # Identity stays as caller text so parsing errors surface from the core
    bus: object = 0
    chip_select: object = 0
    driver: str = "spidev"
    log_level: str = "WARNING"
    output_json: bool = False
    save_defaults: bool = False
    requests: dict[ParameterKind, str] = field(default_factory=dict)


def make_runtime_config(
    *, args: Optional[object] = None, settings: Settings | None = None
) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and optional CLI *args*.

    CLI values (argparse.Namespace-like) win over persisted settings for the
    current invocation only; ``--save-defaults`` is what writes them back.
    """
    if settings is None:
        settings = SettingsStore.load()
    cfg = RuntimeConfig(
        bus=settings.bus,
        chip_select=settings.chip_select,
        driver=settings.driver,
        log_level=settings.log_level,
    )
    if args is None:
        return cfg

    a_bus = getattr(args, "bus", None)
    if a_bus is not None:
        cfg.bus = a_bus
    a_cs = getattr(args, "cs", None)
    if a_cs is not None:
        cfg.chip_select = a_cs
    a_driver = getattr(args, "driver", None)
    if a_driver is not None:
        cfg.driver = a_driver
    if getattr(args, "simulate", False):
        cfg.driver = "simulated"
    a_level = getattr(args, "log_level", None)
    if a_level is not None:
        cfg.log_level = str(a_level).upper()
    cfg.output_json = bool(getattr(args, "json", False))
    cfg.save_defaults = bool(getattr(args, "save_defaults", False))
    for dest, kind in _PARAM_ARGS.items():
        raw = getattr(args, dest, None)
        if raw is not None:
            cfg.requests[kind] = raw
    return cfg


def settings_from_runtime(cfg: RuntimeConfig, bus: int, chip_select: int) -> Settings:
    """Settings snapshot to persist for ``--save-defaults``."""
    return Settings(
        bus=bus,
        chip_select=chip_select,
        driver=cfg.driver,  # type: ignore[arg-type]
        log_level=cfg.log_level,
    )
