"""Pacote de modelos do cardápio e dos pedidos."""

from .entities import (
    AddOn,
    CatalogItem,
    ComposedOrder,
    DailyRevenue,
    ItemAggregate,
    LineItem,
    LineItemAddOn,
    LogEntry,
    MetricsSnapshot,
    MonthlyRevenue,
    OrderDetails,
    OrderReceipt,
    OrderRevenue,
    OrderTotals,
    SelectedAddOn,
    TopItem,
)
from .enums import DeliveryType, OrderStatus, PaymentMethod

__all__ = [
    "AddOn",
    "CatalogItem",
    "ComposedOrder",
    "DailyRevenue",
    "DeliveryType",
    "ItemAggregate",
    "LineItem",
    "LineItemAddOn",
    "LogEntry",
    "MetricsSnapshot",
    "MonthlyRevenue",
    "OrderDetails",
    "OrderReceipt",
    "OrderRevenue",
    "OrderStatus",
    "OrderTotals",
    "PaymentMethod",
    "SelectedAddOn",
    "TopItem",
]
