"""Unit tests for temperature parsing and the interactive prompt."""

from __future__ import annotations

import io
import math

import pytest

from fhir_temperature.errors import InputError, InvalidValueError
from fhir_temperature.input.reader import (
    PROMPT,
    ensure_finite,
    parse_temperature,
    read_temperature,
)


class TestPermissiveParsing:
    @pytest.mark.parametrize("text,expected", [
        ("36.5", 36.5),
        ("  37.2\n", 37.2),
        ("+38", 38.0),
        ("-1.25", -1.25),
        (".5", 0.5),
        ("36.", 36.0),
        ("3.65e1", 36.5),
        ("37.2abc", 37.2),
        ("36,6", 36.0),      # stops at the comma
        ("1e", 1.0),         # incomplete exponent is ignored
        ("0x1.2p5", 36.0),
        ("0x24", 36.0),
        ("0xzz", 0.0),       # "0" then garbage
        ("37٥", 37.0),       # only ASCII digits count
    ])
    def test_numeric_prefix(self, text: str, expected: float) -> None:
        assert parse_temperature(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["abc", "", "\n", "   ", "-", ".", "٣٧", "３７"])
    def test_no_numeric_prefix_is_zero(self, text: str) -> None:
        assert parse_temperature(text) == 0.0

    @pytest.mark.parametrize("text", ["nan", "NaN", "-nan(123)"])
    def test_nan_spellings(self, text: str) -> None:
        assert math.isnan(parse_temperature(text))

    @pytest.mark.parametrize("text,sign", [
        ("inf", 1), ("-Infinity", -1), ("1e999", 1), ("-1e999", -1), ("0x1p99999", 1),
    ])
    def test_infinite_values(self, text: str, sign: int) -> None:
        assert parse_temperature(text) == sign * math.inf


class TestStrictParsing:
    def test_clean_number_accepted(self) -> None:
        assert parse_temperature(" 37.2\n", strict=True) == 37.2

    @pytest.mark.parametrize("text", ["abc", "37.2abc", "36,6", "", "٣٧", "３７"])
    def test_malformed_rejected(self, text: str) -> None:
        with pytest.raises(InvalidValueError):
            parse_temperature(text, strict=True)


class TestEnsureFinite:
    def test_finite_passes_through(self) -> None:
        assert ensure_finite(36.6) == 36.6

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_raises(self, value: float) -> None:
        with pytest.raises(InvalidValueError, match="finite"):
            ensure_finite(value)


class TestReadTemperature:
    def test_argument_skips_prompt(self) -> None:
        stdout = io.StringIO()
        value = read_temperature("36.6", io.StringIO(""), stdout)
        assert value == 36.6
        assert stdout.getvalue() == ""

    def test_prompt_then_stdin(self) -> None:
        stdout = io.StringIO()
        value = read_temperature(None, io.StringIO("37.2\n"), stdout)
        assert value == 37.2
        assert stdout.getvalue() == PROMPT

    def test_reads_only_first_line(self) -> None:
        value = read_temperature(None, io.StringIO("36.9\n40.0\n"), io.StringIO())
        assert value == 36.9

    def test_closed_stdin_raises_input_error(self) -> None:
        with pytest.raises(InputError):
            read_temperature(None, io.StringIO(""), io.StringIO())

    def test_blank_line_reads_as_zero(self) -> None:
        assert read_temperature(None, io.StringIO("\n"), io.StringIO()) == 0.0

    def test_non_finite_argument_raises(self) -> None:
        with pytest.raises(InvalidValueError):
            read_temperature("inf", io.StringIO(""), io.StringIO())

    def test_strict_passed_through(self) -> None:
        with pytest.raises(InvalidValueError):
            read_temperature("warm", io.StringIO(""), io.StringIO(), strict=True)
