"""Descriptors for the four configurable SPI transfer parameters.

Each :class:`ParameterDescriptor` bundles three conversions:

* ``parse``  caller input (text, symbol or typed value) -> domain value.
  Raises ``ValueError`` when the input cannot become the required type.
* ``check``  domain membership; raises ``ValueError`` when out of range.
* ``encode`` / ``decode`` domain value <-> raw driver value. ``decode``
  raises ``ValueError`` when the driver reports something outside the domain.

The handle and controller translate those ``ValueError`` s into the error
taxonomy in :mod:`spidevctl.core.errors`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable

from spidevctl.settings.values import BITS_PER_WORD_LIMITS, SPEED_LIMITS_HZ

from .errors import UnknownParameter


class ParameterKind(str, Enum):
    MODE = "mode"
    SPEED = "speed"
    BITS_PER_WORD = "bits_per_word"
    BIT_JUSTIFICATION = "bit_justification"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ParameterKind.MODE: "mode",
    ParameterKind.SPEED: "speed",
    ParameterKind.BITS_PER_WORD: "bpw",
    ParameterKind.BIT_JUSTIFICATION: "bit justification",
}

# Order used for full refreshes and for applying CLI requests.
REFRESH_ORDER: tuple[ParameterKind, ...] = (
    ParameterKind.MODE,
    ParameterKind.SPEED,
    ParameterKind.BITS_PER_WORD,
    ParameterKind.BIT_JUSTIFICATION,
)


class SpiMode(IntEnum):
    """Clock polarity/phase pair. Bit 1 is CPOL, bit 0 is CPHA."""

    MODE_0 = 0
    MODE_1 = 1
    MODE_2 = 2
    MODE_3 = 3

    @property
    def cpol(self) -> int:
        return (int(self) >> 1) & 1

    @property
    def cpha(self) -> int:
        return int(self) & 1


class BitJustification(Enum):
    MSB_FIRST = "MSB_FIRST"
    LSB_FIRST = "LSB_FIRST"

    @property
    def lsb_first(self) -> bool:
        return self is BitJustification.LSB_FIRST

    @classmethod
    def from_lsb_first(cls, flag: bool) -> "BitJustification":
        return cls.LSB_FIRST if flag else cls.MSB_FIRST


# --------------------------------------------------------------------------
# Conversions


# Plain decimal only: no digit grouping, no non-ASCII digits
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: object) -> int:
    """Convert caller input to an int, rejecting anything but plain decimal."""
    # bool is an int subclass but never a valid count or frequency
    if isinstance(raw, bool):
        raise ValueError(f"expected an integer, got {raw!r}")
    if isinstance(raw, int):
        return int(raw)
    if isinstance(raw, str):
        s = raw.strip()
        if not _DECIMAL_RE.fullmatch(s):
            raise ValueError(f"expected a decimal integer, got {raw!r}")
        return int(s, 10)
    raise ValueError(f"expected an integer, got {raw!r}")


_MODE_SYMBOLS = {m.name: m for m in SpiMode} | {str(int(m)): m for m in SpiMode}


def _parse_mode(raw: object) -> SpiMode:
    if isinstance(raw, SpiMode):
        return raw
    if isinstance(raw, str):
        try:
            return _MODE_SYMBOLS[raw.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown SPI mode {raw!r}") from None
    return SpiMode(parse_int(raw))


def _check_mode(value: object) -> SpiMode:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{value!r} is not an SPI mode")
    return SpiMode(value)


def _decode_mode(raw: object) -> SpiMode:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"driver returned non-integer mode {raw!r}")
    return SpiMode(raw)


_BIT_JUST_ALIASES = {
    "MSB_FIRST": BitJustification.MSB_FIRST,
    "MSB": BitJustification.MSB_FIRST,
    "LSB_FIRST": BitJustification.LSB_FIRST,
    "LSB": BitJustification.LSB_FIRST,
}


def _parse_bit_just(raw: object) -> BitJustification:
    if isinstance(raw, BitJustification):
        return raw
    if isinstance(raw, str):
        key = raw.strip().upper().replace("-", "_")
        try:
            return _BIT_JUST_ALIASES[key]
        except KeyError:
            raise ValueError(f"unknown bit justification {raw!r}") from None
    raise ValueError(f"unknown bit justification {raw!r}")


def _check_bit_just(value: object) -> BitJustification:
    if not isinstance(value, BitJustification):
        raise ValueError(f"{value!r} is not a bit justification")
    return value


def _decode_bit_just(raw: object) -> BitJustification:
    if raw in (0, 1) and isinstance(raw, int):
        return BitJustification.from_lsb_first(bool(raw))
    raise ValueError(f"driver returned invalid lsb-first flag {raw!r}")


def _range_check(lo: int, hi: int) -> Callable[[object], int]:
    def _check(value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{value!r} is not an integer")
        if not lo <= value <= hi:
            raise ValueError(f"{value} outside [{lo}, {hi}]")
        return int(value)

    return _check


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    kind: ParameterKind
    getter: str
    setter: str
    parse: Callable[[object], Any]
    check: Callable[[object], Any]
    encode: Callable[[Any], Any]
    decode: Callable[[object], Any]


_SPEED_CHECK = _range_check(*SPEED_LIMITS_HZ)
_BPW_CHECK = _range_check(*BITS_PER_WORD_LIMITS)

DESCRIPTORS: dict[ParameterKind, ParameterDescriptor] = {
    ParameterKind.MODE: ParameterDescriptor(
        kind=ParameterKind.MODE,
        getter="get_mode",
        setter="set_mode",
        parse=_parse_mode,
        check=_check_mode,
        encode=int,
        decode=_decode_mode,
    ),
    ParameterKind.SPEED: ParameterDescriptor(
        kind=ParameterKind.SPEED,
        getter="get_speed",
        setter="set_speed",
        parse=parse_int,
        check=_SPEED_CHECK,
        encode=_identity,
        decode=_SPEED_CHECK,
    ),
    ParameterKind.BITS_PER_WORD: ParameterDescriptor(
        kind=ParameterKind.BITS_PER_WORD,
        getter="get_bits_per_word",
        setter="set_bits_per_word",
        parse=parse_int,
        check=_BPW_CHECK,
        encode=_identity,
        decode=_BPW_CHECK,
    ),
    ParameterKind.BIT_JUSTIFICATION: ParameterDescriptor(
        kind=ParameterKind.BIT_JUSTIFICATION,
        getter="get_bit_justification",
        setter="set_bit_justification",
        parse=_parse_bit_just,
        check=_check_bit_just,
        encode=lambda v: v.lsb_first,
        decode=_decode_bit_just,
    ),
}


def parameter_kind(kind: ParameterKind | str) -> ParameterKind:
    """Return *kind* as a member; unknown names raise :class:`UnknownParameter`."""
    try:
        return ParameterKind(kind)
    except ValueError:
        raise UnknownParameter(kind) from None


def format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    return str(value)


__all__ = [
    "ParameterKind",
    "SpiMode",
    "BitJustification",
    "ParameterDescriptor",
    "DESCRIPTORS",
    "REFRESH_ORDER",
    "parameter_kind",
    "parse_int",
    "format_value",
]
