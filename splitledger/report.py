"""
Plain-text rendering of ledger results.

One line per item. Empty group and user listings render as a single
blank line; an empty transaction listing renders as nothing. Money is
always shown with two decimals.
"""

from typing import Iterable

from .models import Transaction


def format_amount(amount: float) -> str:
    return f"{amount:.2f}"


def format_balance(balance: float, currency_symbol: str = "$") -> str:
    return f"{currency_symbol}{format_amount(balance)}"


def name_lines(names: Iterable[str]) -> list[str]:
    lines = list(names)
    return lines or [""]


def transaction_lines(transactions: Iterable[Transaction]) -> list[str]:
    return [f"{t.user_name}, {format_amount(t.amount)}" for t in transactions]


def to_text(lines: list[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
