"""Montagem de itens do carrinho a partir do cardápio."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable, Union
from uuid import uuid4

from core.money import to_money
from models import CatalogItem, LineItem, LineItemAddOn, SelectedAddOn
from services.catalog_service import Catalog
from services.errors import ValidationError


def new_line_item_id() -> str:
    return uuid4().hex


class LineItemBuilder:
    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def build(
        self,
        item: CatalogItem,
        selections: Union[Mapping[str, int], Iterable[SelectedAddOn], None] = None,
        quantity: int = 1,
        notes: str = "",
    ) -> LineItem:
        """Calcula um item precificado.

        ``selections`` mapeia código do adicional para quantidade, ou é uma
        sequência de ``SelectedAddOn`` (códigos repetidos somam). Entradas
        com quantidade zero são ignoradas. Os adicionais saem na ordem do
        cardápio e são copiados, sem referência viva ao cadastro.
        """
        if quantity <= 0:
            raise ValidationError("A quantidade do item deve ser pelo menos 1")

        if isinstance(selections, Mapping):
            pares = list(selections.items())
        else:
            pares = [(s.add_on_id, s.quantity) for s in (selections or ())]

        selecionados: Dict[str, int] = {}
        for add_on_id, qtd in pares:
            if qtd < 0:
                raise ValidationError(f"Quantidade negativa para o adicional {add_on_id}")
            if qtd == 0:
                continue
            selecionados[add_on_id] = selecionados.get(add_on_id, 0) + qtd

        resolvidos = {add_on_id: self.catalog.get_add_on(add_on_id) for add_on_id in selecionados}
        ordem = [a.id for a in self.catalog.add_ons if a.id in resolvidos]

        add_ons = tuple(
            LineItemAddOn(
                add_on_id=add_on_id,
                name=resolvidos[add_on_id].name,
                unit_price=to_money(resolvidos[add_on_id].unit_price),
                quantity=selecionados[add_on_id],
            )
            for add_on_id in ordem
        )
        snapshot = CatalogItem(
            id=item.id,
            name=item.name,
            description=item.description,
            unit_price=to_money(item.unit_price),
        )
        return LineItem(
            id=new_line_item_id(),
            item=snapshot,
            add_ons=add_ons,
            quantity=quantity,
            notes=(notes or "").strip(),
        )


__all__ = ["LineItemBuilder", "new_line_item_id"]
