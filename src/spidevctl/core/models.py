from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidIdentity, ParameterReadFailure
from .params import REFRESH_ORDER, ParameterKind, SpiMode, format_value, parse_int

# Largest index the kernel accepts (signed 32-bit)
MAX_INDEX = 2**31 - 1


class DeviceIdentity(BaseModel):
    """Bus / chip-select pair addressing one spidev node."""

    model_config = ConfigDict(frozen=True)

    bus: int = Field(
        ..., ge=0, le=MAX_INDEX, strict=True, description="SPI bus number"
    )
    chip_select: int = Field(
        ..., ge=0, le=MAX_INDEX, strict=True, description="Chip select line"
    )

    @classmethod
    def parse(cls, bus: object, chip_select: object) -> "DeviceIdentity":
        """Build an identity from caller text (or ints).

        Raises :class:`InvalidIdentity` when either value is not a
        non-negative integer.
        """
        try:
            b = parse_int(bus)
            cs = parse_int(chip_select)
        except ValueError as e:
            raise InvalidIdentity(bus, chip_select, str(e)) from None
        try:
            return cls(bus=b, chip_select=cs)
        except ValidationError:
            raise InvalidIdentity(
                bus, chip_select, f"bus and chip select must be in [0, {MAX_INDEX}]"
            ) from None

    @property
    def name(self) -> str:
        return f"spidev{self.bus}.{self.chip_select}"

    @property
    def path(self) -> str:
        return f"/dev/{self.name}"

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class Summary:
    """Outcome of a full parameter refresh.

    Each parameter lands in exactly one of ``values`` (read succeeded) or
    ``errors`` (read failed).
    """

    identity: DeviceIdentity
    values: dict[ParameterKind, Any] = field(default_factory=dict)
    errors: dict[ParameterKind, ParameterReadFailure] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __getitem__(self, kind: ParameterKind) -> Any:
        return self.values[kind]

    def get(self, kind: ParameterKind, default: Any = None) -> Any:
        return self.values.get(kind, default)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"device": self.identity.name}
        for kind in REFRESH_ORDER:
            v = self.values.get(kind)
            if isinstance(v, Enum):
                v = v.name
            out[kind.value] = v
        out["errors"] = {k.value: str(e) for k, e in self.errors.items()}
        return out

    def lines(self) -> list[str]:
        rows = [f"SPI device: {self.identity.name}"]
        for kind in REFRESH_ORDER:
            if kind in self.values:
                value = self.values[kind]
                text = format_value(value)
                if isinstance(value, SpiMode):
                    text += f" (CPOL={value.cpol}, CPHA={value.cpha})"
                rows.append(f"  {kind.label:<18} {text}")
            else:
                rows.append(f"  {kind.label:<18} <read failed>")
        return rows
