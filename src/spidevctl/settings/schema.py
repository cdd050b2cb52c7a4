"""Pydantic model for persisted user defaults."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .values import LOG_LEVELS

DriverName = Literal["spidev", "simulated"]


class Settings(BaseModel):
    """Defaults persisted to disk.

    Parameters
    ----------
    bus: SPI bus offered when no ``--bus`` is given.
    chip_select: Chip select offered when no ``--cs`` is given.
    driver: ``spidev`` for real hardware or ``simulated`` for an in-memory
        device.
    log_level: Root logger level name.
    """

    bus: int = Field(default=0, ge=0)
    chip_select: int = Field(default=0, ge=0)
    driver: DriverName = Field(default="spidev")
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _chk_level(cls, v: str) -> str:
        v = str(v).upper()
        if v not in set(LOG_LEVELS):
            raise ValueError(
                "invalid log level: must be one of " + ", ".join(LOG_LEVELS)
            )
        return v
