"""Chat command parsing.

The wire protocol is a bare number typed by the visitor.  ``parse_command``
turns it into one of the command types below so the dispatcher never
switches on magic numbers.

    1   browse the menu
    99  checkout
    98  order history
    97  current order
    0   cancel current order
    *   any other number selects the menu item with that code
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

BROWSE_CODE = 1
CHECKOUT_CODE = 99
HISTORY_CODE = 98
INSPECT_CODE = 97
CANCEL_CODE = 0

MAX_COMMAND_CODE = 999

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Browse:
    pass


@dataclass(frozen=True)
class Checkout:
    pass


@dataclass(frozen=True)
class History:
    pass


@dataclass(frozen=True)
class Inspect:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class SelectItem:
    code: int


@dataclass(frozen=True)
class Invalid:
    reason: str


Command = Union[Browse, Checkout, History, Inspect, Cancel, SelectItem, Invalid]

_RESERVED: dict[int, Command] = {
    BROWSE_CODE: Browse(),
    CHECKOUT_CODE: Checkout(),
    HISTORY_CODE: History(),
    INSPECT_CODE: Inspect(),
    CANCEL_CODE: Cancel(),
}


def parse_command(text: str | None, max_code: int = MAX_COMMAND_CODE) -> Command:
    raw = (text or "").strip()
    if not _DIGITS.fullmatch(raw):
        return Invalid("Invalid input. Please enter numbers only.")

    out_of_range = Invalid(f"Invalid input. Please enter a number between 0 and {max_code}.")

    # Bound the digit count before int() so huge inputs never reach the conversion.
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(str(max_code)):
        return out_of_range

    code = int(digits)
    if code > max_code:
        return out_of_range

    return _RESERVED.get(code, SelectItem(code))
