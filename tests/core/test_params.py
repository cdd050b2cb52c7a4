from __future__ import annotations

import pytest

from spidevctl.core.errors import SpiConfigError, UnknownParameter
from spidevctl.core.params import (
    DESCRIPTORS,
    REFRESH_ORDER,
    BitJustification,
    ParameterKind,
    SpiMode,
    format_value,
    parameter_kind,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("MODE_2", SpiMode.MODE_2),
        ("mode_3", SpiMode.MODE_3),
        (" 0 ", SpiMode.MODE_0),
        ("3", SpiMode.MODE_3),
        (2, SpiMode.MODE_2),
        (SpiMode.MODE_1, SpiMode.MODE_1),
    ],
)
def test_parse_mode(raw: object, expected: SpiMode) -> None:
    assert DESCRIPTORS[ParameterKind.MODE].parse(raw) is expected


@pytest.mark.parametrize(
    "raw",
    ["MODE_4", "fast", "", None, True, 1.0, "MODE_0_1", "mode1", "0_1", "MODE 1", "4"],
)
def test_parse_mode_rejects(raw: object) -> None:
    with pytest.raises(ValueError):
        DESCRIPTORS[ParameterKind.MODE].parse(raw)


def test_mode_clock_bits() -> None:
    assert (SpiMode.MODE_0.cpol, SpiMode.MODE_0.cpha) == (0, 0)
    assert (SpiMode.MODE_1.cpol, SpiMode.MODE_1.cpha) == (0, 1)
    assert (SpiMode.MODE_2.cpol, SpiMode.MODE_2.cpha) == (1, 0)
    assert (SpiMode.MODE_3.cpol, SpiMode.MODE_3.cpha) == (1, 1)


def test_parse_bit_justification_aliases() -> None:
    parse = DESCRIPTORS[ParameterKind.BIT_JUSTIFICATION].parse
    assert parse("LSB_FIRST") is BitJustification.LSB_FIRST
    assert parse("lsb") is BitJustification.LSB_FIRST
    assert parse("msb-first") is BitJustification.MSB_FIRST
    with pytest.raises(ValueError):
        parse("middle")
    with pytest.raises(ValueError):
        parse(True)


def test_parse_integers_is_syntactic_only() -> None:
    parse = DESCRIPTORS[ParameterKind.SPEED].parse
    # negative values parse; the domain check rejects them later
    assert parse("-100") == -100
    assert parse(" 1000000 ") == 1_000_000
    # digit grouping and non-ASCII digits are not plain decimal
    for bad in (
        "1e6",
        "12.5",
        "abc",
        "",
        True,
        "1_000_000",
        "0x10",
        "\uff11\uff12",
        "1 0",
    ):
        with pytest.raises(ValueError):
            parse(bad)


@pytest.mark.parametrize(
    "kind,value",
    [
        (ParameterKind.SPEED, 0),
        (ParameterKind.SPEED, -100),
        (ParameterKind.SPEED, 2**32),
        (ParameterKind.BITS_PER_WORD, 0),
        (ParameterKind.BITS_PER_WORD, 33),
        (ParameterKind.BITS_PER_WORD, True),
        (ParameterKind.MODE, 4),
        (ParameterKind.BIT_JUSTIFICATION, "MSB_FIRST"),
    ],
)
def test_check_rejects_out_of_domain(kind: ParameterKind, value: object) -> None:
    with pytest.raises(ValueError):
        DESCRIPTORS[kind].check(value)


def test_bit_justification_encoding() -> None:
    d = DESCRIPTORS[ParameterKind.BIT_JUSTIFICATION]
    assert d.encode(BitJustification.LSB_FIRST) is True
    assert d.encode(BitJustification.MSB_FIRST) is False
    assert d.decode(False) is BitJustification.MSB_FIRST
    assert d.decode(1) is BitJustification.LSB_FIRST
    with pytest.raises(ValueError):
        d.decode(2)


def test_decode_rejects_undocumented_mode() -> None:
    with pytest.raises(ValueError):
        DESCRIPTORS[ParameterKind.MODE].decode(7)


def test_refresh_order_and_labels() -> None:
    assert REFRESH_ORDER == (
        ParameterKind.MODE,
        ParameterKind.SPEED,
        ParameterKind.BITS_PER_WORD,
        ParameterKind.BIT_JUSTIFICATION,
    )
    assert ParameterKind.BITS_PER_WORD.label == "bpw"
    assert format_value(SpiMode.MODE_2) == "MODE_2"
    assert format_value(8) == "8"


def test_parameter_kind_lookup() -> None:
    assert parameter_kind("speed") is ParameterKind.SPEED
    assert parameter_kind(ParameterKind.MODE) is ParameterKind.MODE
    with pytest.raises(UnknownParameter) as ei:
        parameter_kind("volume")
    assert isinstance(ei.value, SpiConfigError)
    assert ei.value.name == "volume"
