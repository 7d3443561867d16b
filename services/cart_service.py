"""Carrinho de um cliente: itens em ordem de inserção."""
from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from core.money import sum_money
from models import LineItem
from services.line_item_service import new_line_item_id


class Cart:
    def __init__(self) -> None:
        self._itens: List[LineItem] = []

    # --- helpers ---------------------------------------------------------
    def _indice(self, line_item_id: str) -> Optional[int]:
        return next((i for i, item in enumerate(self._itens) if item.id == line_item_id), None)

    # --- Consulta --------------------------------------------------------
    @property
    def items(self) -> Tuple[LineItem, ...]:
        return tuple(self._itens)

    def get(self, line_item_id: str) -> Optional[LineItem]:
        indice = self._indice(line_item_id)
        return self._itens[indice] if indice is not None else None

    @property
    def is_empty(self) -> bool:
        return not self._itens

    def __len__(self) -> int:
        return len(self._itens)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(tuple(self._itens))

    def __contains__(self, line_item_id: object) -> bool:
        return any(item.id == line_item_id for item in self._itens)

    # --- Mutações --------------------------------------------------------
    def add(self, line_item: LineItem) -> LineItem:
        """Adiciona uma cópia do item, garantindo código único no carrinho."""
        line_id = line_item.id
        if not line_id or line_id in self:
            line_id = new_line_item_id()
        novo = replace(line_item, id=line_id)
        self._itens.append(novo)
        return novo

    def remove(self, line_item_id: str) -> None:
        self._itens = [item for item in self._itens if item.id != line_item_id]

    def update_quantity(self, line_item_id: str, new_quantity: int) -> None:
        if new_quantity <= 0:
            self.remove(line_item_id)
            return
        indice = self._indice(line_item_id)
        if indice is None:
            return
        # adicionais não são reeditáveis; o total escala com a quantidade
        self._itens[indice] = replace(self._itens[indice], quantity=new_quantity)

    def clear(self) -> None:
        self._itens = []

    # --- Totais ----------------------------------------------------------
    def total_price(self) -> Decimal:
        return sum_money(item.total_price for item in self._itens)

    def total_item_count(self) -> int:
        return sum(item.quantity for item in self._itens)


__all__ = ["Cart"]
