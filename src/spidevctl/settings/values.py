"""Centralized parameter limits and device defaults loaded from YAML.

The master source is ``values.yml`` in this package. On import we load and
parse it; a missing or corrupt file falls back to the hard-coded literals
below so the tool still runs with the stock spidev limits.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
# spidev takes max_speed_hz as a u32
_FALLBACK_SPEED_LIMITS_HZ = (1, 0xFFFFFFFF)
_FALLBACK_BPW_LIMITS = (1, 32)
_FALLBACK_SIMULATED_DEVICE = {
    "mode": 0,
    "speed_hz": 500_000,
    "bits_per_word": 8,
    "lsb_first": False,
}
_FALLBACK_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _int_pair(v: Any) -> Tuple[int, int] | None:
    if not isinstance(v, dict):
        return None
    lo, hi = v.get("min"), v.get("max")
    if isinstance(lo, int) and isinstance(hi, int) and 0 < lo <= hi:
        return (lo, hi)
    return None


# --- Load YAML -----------------------------------------------------------
_speed_limits: Tuple[int, int] = _FALLBACK_SPEED_LIMITS_HZ
_bpw_limits: Tuple[int, int] = _FALLBACK_BPW_LIMITS
_simulated: Dict[str, Any] = dict(_FALLBACK_SIMULATED_DEVICE)
_log_levels: list[str] = list(_FALLBACK_LOG_LEVELS)

if _YAML_PATH.exists():  # pragma: no branch - simple path
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("failed to load %s: %s", _YAML_PATH, e)
        raw = {}
    if not isinstance(raw, dict):
        raw = {}
    limits = raw.get("limits", {})
    if isinstance(limits, dict):
        _speed_limits = _int_pair(limits.get("speed_hz")) or _speed_limits
        _bpw_limits = _int_pair(limits.get("bits_per_word")) or _bpw_limits
    sim = raw.get("simulated_device")
    if isinstance(sim, dict):
        _simulated.update(
            {k: v for k, v in sim.items() if k in _FALLBACK_SIMULATED_DEVICE}
        )
    levels = raw.get("log_levels")
    if isinstance(levels, list) and all(isinstance(x, str) for x in levels):
        _log_levels = [x.upper() for x in levels]

# --- Public accessors ----------------------------------------------------
SPEED_LIMITS_HZ: Tuple[int, int] = _speed_limits
BITS_PER_WORD_LIMITS: Tuple[int, int] = _bpw_limits
SIMULATED_DEVICE_DEFAULTS: Dict[str, Any] = dict(_simulated)
LOG_LEVELS: Sequence[str] = tuple(_log_levels)

__all__ = [
    "SPEED_LIMITS_HZ",
    "BITS_PER_WORD_LIMITS",
    "SIMULATED_DEVICE_DEFAULTS",
    "LOG_LEVELS",
]
