"""Aritmética de dinheiro em ``Decimal`` com duas casas."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Numero = Union[Decimal, int, float, str]


def to_money(value: Numero) -> Decimal:
    if isinstance(value, float):
        # passa por str para não herdar o erro binário do float
        value = repr(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    return sum((to_money(v) for v in values), ZERO)


def format_brl(value: Numero) -> str:
    """Formata como ``R$ 25,00`` (vírgula decimal, sem separador de milhar)."""
    return "R$ " + f"{to_money(value):.2f}".replace(".", ",")


__all__ = ["CENT", "ZERO", "to_money", "sum_money", "format_brl"]
