"""Sessão de compra de um cliente: um carrinho próprio por sessão."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from models import ComposedOrder, DeliveryType, LineItem, OrderDetails, OrderTotals
from repositories.order_repository import OrderRecorder
from services.cart_service import Cart
from services.catalog_service import Catalog
from services.line_item_service import LineItemBuilder
from services.order_service import OrderComposer
from services.whatsapp import whatsapp_url


@dataclass(frozen=True)
class CheckoutResult:
    order: ComposedOrder
    message: str
    whatsapp_url: str


class OrderingSession:
    def __init__(
        self,
        catalog: Catalog,
        recorder: OrderRecorder,
        delivery_fee: Optional[Decimal] = None,
        whatsapp_number: Optional[str] = None,
    ) -> None:
        self.catalog = catalog
        self.cart = Cart()
        self.builder = LineItemBuilder(catalog)
        self.composer = OrderComposer(recorder, delivery_fee=delivery_fee)
        self.whatsapp_number = whatsapp_number

    # --- Carrinho --------------------------------------------------------
    def add_to_cart(
        self,
        item_id: str,
        selections: Optional[Mapping[str, int]] = None,
        quantity: int = 1,
        notes: str = "",
    ) -> LineItem:
        item = self.catalog.get_item(item_id)
        return self.cart.add(self.builder.build(item, selections, quantity, notes))

    def remove(self, line_item_id: str) -> None:
        self.cart.remove(line_item_id)

    def update_quantity(self, line_item_id: str, quantity: int) -> None:
        self.cart.update_quantity(line_item_id, quantity)

    def totals(self, delivery_type: DeliveryType) -> OrderTotals:
        return self.composer.compute_totals(self.cart, delivery_type)

    # --- Checkout --------------------------------------------------------
    def preview(self, details: OrderDetails) -> str:
        return self.composer.render_summary(self.cart, details, self.totals(details.delivery_type))

    def checkout(self, details: OrderDetails) -> CheckoutResult:
        # a mensagem é montada antes do envio, que esvazia o carrinho
        self.composer.validate(details)
        mensagem = self.preview(details)
        pedido = self.composer.submit(self.cart, details)
        return CheckoutResult(
            order=pedido,
            message=mensagem,
            whatsapp_url=whatsapp_url(mensagem, self.whatsapp_number),
        )


__all__ = ["CheckoutResult", "OrderingSession"]
