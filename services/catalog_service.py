"""Cardápio fixo da loja: hambúrgueres e adicionais."""
from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from models import AddOn, CatalogItem
from services.errors import CatalogReferenceError, ValidationError


class Catalog:
    def __init__(self, items: Iterable[CatalogItem], add_ons: Iterable[AddOn]) -> None:
        self._items: Dict[str, CatalogItem] = {}
        self._add_ons: Dict[str, AddOn] = {}
        for item in items:
            self._registrar(self._items, item)
        for add_on in add_ons:
            self._registrar(self._add_ons, add_on)

    @staticmethod
    def _registrar(destino: dict, entrada) -> None:
        if entrada.id in destino:
            raise ValidationError(f"Código duplicado no cardápio: {entrada.id}")
        if entrada.unit_price < 0:
            raise ValidationError(f"Preço negativo para {entrada.name}")
        destino[entrada.id] = entrada

    @property
    def items(self) -> Tuple[CatalogItem, ...]:
        return tuple(self._items.values())

    @property
    def add_ons(self) -> Tuple[AddOn, ...]:
        return tuple(self._add_ons.values())

    def get_item(self, item_id: str) -> CatalogItem:
        item = self._items.get(item_id)
        if item is None:
            raise CatalogReferenceError(f"Item {item_id} não existe no cardápio")
        return item

    def get_add_on(self, add_on_id: str) -> AddOn:
        add_on = self._add_ons.get(add_on_id)
        if add_on is None:
            raise CatalogReferenceError(f"Adicional {add_on_id} não existe no cardápio")
        return add_on

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        return self._items.get(item_id)


def default_catalog() -> Catalog:
    return Catalog(
        items=[
            CatalogItem(
                id="1",
                name="Na Brasa Clássico",
                description="Pão brioche, blend de 160g e duas fatias de queijo cheddar Polenghi",
                unit_price=Decimal("25.00"),
            ),
            CatalogItem(
                id="2",
                name="Na Brasa Especial",
                description=(
                    "Pão brioche, blend de 160g, duas fatias de queijo cheddar Polenghi, "
                    "cebola caramelizada e bacon premium"
                ),
                unit_price=Decimal("30.00"),
            ),
        ],
        add_ons=[
            AddOn(id="hamburger", name="Hambúrguer", unit_price=Decimal("9.00")),
            AddOn(id="ovo", name="Ovo", unit_price=Decimal("3.00")),
            AddOn(id="bacon", name="Bacon", unit_price=Decimal("5.00")),
            AddOn(id="cebola", name="Cebola", unit_price=Decimal("3.00")),
            AddOn(id="baconese", name="Baconese", unit_price=Decimal("3.00")),
            AddOn(id="rucula", name="Rúcula", unit_price=Decimal("3.00")),
        ],
    )


__all__ = ["Catalog", "default_catalog"]
