"""Parsing of chat command text."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from tradesim.core.exceptions import ValidationError
from tradesim.services.accounting import AMOUNT_PLACES, fits_amount_scale

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9.\-]{1,10}$")


@dataclass(frozen=True)
class ParsedCommand:
    """
    A command split into its name and arguments.

    "/Buy@SimBot aapl 10" parses to name="buy", args=("aapl", "10").
    """

    name: str
    args: tuple[str, ...] = ()

    def arg(self, index: int) -> Optional[str]:
        return self.args[index] if index < len(self.args) else None

    @property
    def rest(self) -> str:
        """All arguments joined back with single spaces."""
        return " ".join(self.args)


def parse_command(text: str) -> Optional[ParsedCommand]:
    """Split command text; returns None for blank input."""
    parts = (text or "").split()
    if not parts:
        return None

    name = parts[0].lower()
    if name.startswith("/"):
        name = name[1:]
    # Group chats address bots as /command@botname
    name = name.split("@", 1)[0]
    return ParsedCommand(name=name, args=tuple(parts[1:]))


def parse_symbol(raw: str) -> str:
    """Uppercase and validate a ticker symbol."""
    symbol = (raw or "").strip().upper()
    if not SYMBOL_PATTERN.match(symbol):
        raise ValidationError(f"Invalid symbol: {raw}")
    return symbol


def parse_quantity(raw: str) -> Decimal:
    """
    Parse a share quantity.

    Accepts integers and decimals ("10", "5.5"). The value must be finite,
    strictly positive and have at most AMOUNT_PLACES decimal places.
    """
    try:
        quantity = Decimal((raw or "").strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid quantity: {raw}. Use a number, e.g. 10 or 5.5")

    if not quantity.is_finite():
        raise ValidationError(f"Invalid quantity: {raw}. Use a number, e.g. 10 or 5.5")
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than 0.")
    if not fits_amount_scale(quantity):
        raise ValidationError(f"Quantity supports at most {AMOUNT_PLACES} decimal places.")
    return quantity
