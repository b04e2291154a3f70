"""Chat command parsing, dispatch and reply formatting."""

from tradesim.commands.parser import ParsedCommand, parse_command, parse_symbol, parse_quantity
from tradesim.commands.router import CommandRouter, UserProfile

__all__ = [
    "ParsedCommand",
    "parse_command",
    "parse_symbol",
    "parse_quantity",
    "CommandRouter",
    "UserProfile",
]
