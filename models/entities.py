"""Modelos de domínio do cardápio, carrinho e pedidos.

As estruturas são dataclasses simples, independentes de banco ou interface.
Valores monetários são sempre ``Decimal`` com duas casas.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from core.money import ZERO, sum_money, to_money
from models.enums import DeliveryType, OrderStatus, PaymentMethod
from services.errors import ValidationError


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    description: str
    unit_price: Decimal


@dataclass(frozen=True)
class AddOn:
    id: str
    name: str
    unit_price: Decimal


@dataclass(frozen=True)
class SelectedAddOn:
    add_on_id: str
    quantity: int = 1


@dataclass(frozen=True)
class LineItemAddOn:
    """Cópia do adicional no momento em que o item entrou no carrinho."""

    add_on_id: str
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class LineItem:
    id: str
    item: CatalogItem
    add_ons: Tuple[LineItemAddOn, ...] = ()
    quantity: int = 1
    notes: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValidationError("A quantidade do item deve ser pelo menos 1")

    @property
    def unit_price(self) -> Decimal:
        """Preço de uma unidade: item + adicionais."""
        return to_money(self.item.unit_price) + sum_money(a.total for a in self.add_ons)

    @property
    def total_price(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class OrderDetails:
    delivery_type: DeliveryType
    payment_method: PaymentMethod
    customer_name: str
    customer_phone: str
    address: str = ""
    notes: str = ""


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal


@dataclass(frozen=True)
class ComposedOrder:
    line_items: Tuple[LineItem, ...]
    details: OrderDetails
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    order_number: Optional[int] = None
    created_at: Optional[datetime] = None
    status: OrderStatus = OrderStatus.PENDING
    order_id: Optional[str] = None


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    order_number: int
    created_at: datetime


@dataclass(frozen=True)
class OrderRevenue:
    total: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ItemAggregate:
    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class TopItem:
    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class DailyRevenue:
    date: date
    revenue: Decimal = ZERO


@dataclass(frozen=True)
class MonthlyRevenue:
    month: str
    revenue: Decimal = ZERO


@dataclass(frozen=True)
class MetricsSnapshot:
    total_orders: int
    total_revenue: Decimal
    average_ticket: Decimal
    today_revenue: Decimal
    top_items: Tuple[TopItem, ...] = field(default_factory=tuple)
    daily_revenue: Tuple[DailyRevenue, ...] = field(default_factory=tuple)
    monthly_revenue: Tuple[MonthlyRevenue, ...] = field(default_factory=tuple)


@dataclass
class LogEntry:
    id: int
    acao: str
    detalhes: str
    usuario: str
    criado_em: datetime
