"""Regras de fechamento do pedido: validação, totais, mensagem e envio."""
from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import List, Optional

from core import config
from core.money import ZERO, format_brl, to_money
from models import ComposedOrder, DeliveryType, OrderDetails, OrderStatus, OrderTotals
from repositories.order_repository import OrderRecorder
from services.cart_service import Cart
from services.errors import (
    MissingAddress,
    MissingCustomerInfo,
    StorageError,
    SubmissionInProgressError,
    ValidationError,
)


class OrderComposer:
    def __init__(
        self,
        recorder: OrderRecorder,
        delivery_fee: Optional[Decimal] = None,
        store_name: Optional[str] = None,
    ) -> None:
        self.recorder = recorder
        self.delivery_fee = to_money(config.DELIVERY_FEE if delivery_fee is None else delivery_fee)
        self.store_name = store_name or config.STORE_NAME
        self._enviando = False

    @property
    def submitting(self) -> bool:
        return self._enviando

    # --- Validação -------------------------------------------------------
    def validate(self, details: OrderDetails) -> None:
        if not (details.customer_name or "").strip() or not (details.customer_phone or "").strip():
            raise MissingCustomerInfo("Por favor, preencha nome e telefone.")
        if details.delivery_type == DeliveryType.DELIVERY and not (details.address or "").strip():
            raise MissingAddress("Por favor, informe o endereço para delivery.")

    # --- Totais ----------------------------------------------------------
    def compute_totals(self, cart: Cart, delivery_type: DeliveryType) -> OrderTotals:
        subtotal = cart.total_price()
        taxa = self.delivery_fee if delivery_type == DeliveryType.DELIVERY else ZERO
        return OrderTotals(subtotal=subtotal, delivery_fee=taxa, total=subtotal + taxa)

    # --- Mensagem --------------------------------------------------------
    def render_summary(self, cart: Cart, details: OrderDetails, totals: OrderTotals) -> str:
        """Texto do pedido enviado pelo WhatsApp.

        A ordem das seções é fixa: cabeçalho, cliente, itens, subtotal, taxa
        de entrega (só delivery), total, tipo, endereço (só delivery),
        pagamento, observações (se houver) e agradecimento.
        """
        linhas: List[str] = [f"🍔 *NOVO PEDIDO - {self.store_name}*", ""]

        linhas.append(f"👤 *Cliente:* {details.customer_name.strip()}")
        linhas.append(f"📞 *Telefone:* {details.customer_phone.strip()}")
        linhas.append("")

        linhas.append("🍔 *ITENS DO PEDIDO:*")
        for indice, item in enumerate(cart.items, start=1):
            linhas.append(f"{indice}. *{item.item.name}* ({item.quantity}x)")
            linhas.append(f"   Preço unitário: {format_brl(item.item.unit_price)}")
            if item.add_ons:
                linhas.append("   Adicionais:")
                for add_on in item.add_ons:
                    linhas.append(
                        f"   • {add_on.name} ({add_on.quantity}x +{format_brl(add_on.unit_price)} cada)"
                    )
            if item.notes:
                linhas.append(f"   📝 Observações: {item.notes}")
            linhas.append(f"   Subtotal: {format_brl(item.total_price)}")
            linhas.append("")

        linhas.append(f"🧾 *Subtotal dos itens:* {format_brl(totals.subtotal)}")
        if details.delivery_type == DeliveryType.DELIVERY:
            linhas.append(f"🛵 *Taxa de Entrega:* {format_brl(totals.delivery_fee)}")
        linhas.append(f"💰 *TOTAL GERAL: {format_brl(totals.total)}*")
        linhas.append("")

        linhas.append(f"🚚 *Tipo:* {details.delivery_type.label}")
        if details.delivery_type == DeliveryType.DELIVERY and (details.address or "").strip():
            linhas.append(f"📍 *Endereço:* {details.address.strip()}")
        linhas.append(f"💳 *Pagamento:* {details.payment_method.label}")
        linhas.append("")

        if (details.notes or "").strip():
            linhas.append(f"📝 *Observações:* {details.notes.strip()}")
            linhas.append("")

        linhas.append("Obrigado pela preferência! 🙏")
        return "\n".join(linhas)

    # --- Envio -----------------------------------------------------------
    def compose(self, cart: Cart, details: OrderDetails) -> ComposedOrder:
        totals = self.compute_totals(cart, details.delivery_type)
        return ComposedOrder(
            line_items=tuple(replace(li) for li in cart.items),
            details=details,
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            total=totals.total,
            status=OrderStatus.PENDING,
        )

    def submit(self, cart: Cart, details: OrderDetails) -> ComposedOrder:
        """Registra o pedido e esvazia o carrinho.

        Se o registro falhar o carrinho fica intacto para nova tentativa.
        Um segundo envio enquanto o primeiro não terminou é recusado.
        """
        if self._enviando:
            raise SubmissionInProgressError("Já existe um envio de pedido em andamento")
        if cart.is_empty:
            raise ValidationError("O carrinho está vazio")
        self.validate(details)

        self._enviando = True
        try:
            pedido = self.compose(cart, details)
            try:
                recibo = self.recorder.persist(pedido)
            except StorageError:
                raise
            except Exception as exc:
                raise StorageError("Não foi possível registrar o pedido") from exc
        finally:
            self._enviando = False

        cart.clear()
        return replace(
            pedido,
            order_id=recibo.order_id,
            order_number=recibo.order_number,
            created_at=recibo.created_at,
        )


__all__ = ["OrderComposer"]
