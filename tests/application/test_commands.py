"""Unit tests for chat command parsing."""

import pytest

from chatorder.application.commands import (
    Browse,
    Cancel,
    Checkout,
    History,
    Inspect,
    Invalid,
    SelectItem,
    parse_command,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1", Browse()),
        ("99", Checkout()),
        ("98", History()),
        ("97", Inspect()),
        ("0", Cancel()),
        ("10", SelectItem(10)),
        (" 12 ", SelectItem(12)),
        ("007", SelectItem(7)),
        ("000", Cancel()),
    ],
)
def test_valid_input(text, expected):
    assert parse_command(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "12a", "-1", "1.5", "+3", "ten", None, "1 2"])
def test_non_digit_input_is_invalid(text):
    command = parse_command(text)
    assert isinstance(command, Invalid)
    assert "numbers only" in command.reason


def test_out_of_bound_is_invalid():
    command = parse_command("5000")
    assert isinstance(command, Invalid)
    assert "between 0 and 999" in command.reason


def test_bound_is_configurable():
    assert parse_command("50", max_code=99) == SelectItem(50)
    assert isinstance(parse_command("100", max_code=99), Invalid)


def test_very_long_number_is_out_of_range():
    command = parse_command("9" * 5000)
    assert isinstance(command, Invalid)
    assert "between 0 and 999" in command.reason


def test_long_zero_padding_is_ignored():
    assert parse_command("0" * 4400 + "10") == SelectItem(10)
    assert parse_command("0" * 4400) == Cancel()
