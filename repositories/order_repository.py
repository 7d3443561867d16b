"""Registro de pedidos.

``OrderRecorder`` é o contrato consumido pelo checkout e pelo painel.
``MemoryOrderRepository`` guarda tudo em memória (testes e demonstração);
``SqlOrderRepository`` grava via SQLAlchemy. A API é a mesma, permitindo
alternar a implementação sem mudar os serviços.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Protocol
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.money import format_brl, to_money
from database.db import create_tables, get_engine, get_session_factory
from models import (
    CatalogItem,
    ComposedOrder,
    DeliveryType,
    ItemAggregate,
    LineItem,
    LineItemAddOn,
    LogEntry,
    OrderDetails,
    OrderReceipt,
    OrderRevenue,
    OrderStatus,
    PaymentMethod,
)
from models.records import PedidoItemAdicionalRecord, PedidoItemRecord, PedidoRecord
from services import logging_service
from services.errors import OrderNotFoundError, StorageError

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite devolve datetimes sem fuso; gravamos sempre em UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _naive_utc(value: datetime) -> datetime:
    return _as_utc(value).replace(tzinfo=None)


class OrderRecorder(Protocol):
    def persist(self, order: ComposedOrder) -> OrderReceipt:
        ...

    def mark_completed(self, order_id: str, usuario: str = "painel") -> None:
        ...

    def list_pending(self, limit: int = 50) -> List[ComposedOrder]:
        ...

    def list_recent(self, limit: int = 50) -> List[ComposedOrder]:
        ...

    def query_orders_since(self, since: Optional[datetime] = None) -> List[OrderRevenue]:
        ...

    def query_line_item_aggregates(self) -> List[ItemAggregate]:
        ...


class MemoryOrderRepository:
    def __init__(self, clock: Clock = _utc_now) -> None:
        self.clock = clock
        self.orders: List[ComposedOrder] = []
        self.logs: List[LogEntry] = []
        self._seq = 1
        self._ultimo_numero = 0

    def next_id(self) -> int:
        atual = self._seq
        self._seq += 1
        return atual

    def log(self, acao: str, detalhes: str, usuario: str) -> None:
        self.logs.append(
            LogEntry(id=self.next_id(), acao=acao, detalhes=detalhes, usuario=usuario, criado_em=self.clock())
        )

    def _indice(self, order_id: str) -> int:
        indice = next((i for i, o in enumerate(self.orders) if o.order_id == order_id), None)
        if indice is None:
            raise OrderNotFoundError(f"Pedido {order_id} não encontrado")
        return indice

    def _recentes(self) -> List[ComposedOrder]:
        return sorted(
            reversed(self.orders),
            key=lambda o: o.created_at,
            reverse=True,
        )

    # --- Escrita ---------------------------------------------------------
    def persist(self, order: ComposedOrder) -> OrderReceipt:
        # monta o registro completo antes de publicá-lo na lista
        numero = self._ultimo_numero + 1
        registro = replace(
            order,
            line_items=tuple(replace(li) for li in order.line_items),
            order_id=uuid4().hex,
            order_number=numero,
            created_at=_as_utc(self.clock()),
            status=OrderStatus.PENDING,
        )
        self.orders.append(registro)
        self._ultimo_numero = numero
        self.log(
            "REGISTRAR_PEDIDO",
            f"Pedido #{numero} total {format_brl(registro.total)}",
            order.details.customer_name,
        )
        return OrderReceipt(
            order_id=registro.order_id,
            order_number=numero,
            created_at=registro.created_at,
        )

    def mark_completed(self, order_id: str, usuario: str = "painel") -> None:
        indice = self._indice(order_id)
        pedido = self.orders[indice]
        if pedido.status == OrderStatus.COMPLETED:
            return
        self.orders[indice] = replace(pedido, status=OrderStatus.COMPLETED)
        self.log("CONCLUIR_PEDIDO", f"Pedido #{pedido.order_number} concluído", usuario)

    # --- Consultas -------------------------------------------------------
    def list_pending(self, limit: int = 50) -> List[ComposedOrder]:
        return [o for o in self._recentes() if o.status == OrderStatus.PENDING][:limit]

    def list_recent(self, limit: int = 50) -> List[ComposedOrder]:
        return self._recentes()[:limit]

    def query_orders_since(self, since: Optional[datetime] = None) -> List[OrderRevenue]:
        limite = _as_utc(since) if since is not None else None
        return [
            OrderRevenue(total=o.total, created_at=o.created_at)
            for o in self.orders
            if limite is None or o.created_at >= limite
        ]

    def query_line_item_aggregates(self) -> List[ItemAggregate]:
        return [
            ItemAggregate(name=li.item.name, quantity=li.quantity, revenue=li.total_price)
            for o in self.orders
            for li in o.line_items
        ]


class SqlOrderRepository:
    """Versão do repositório que grava os pedidos em banco via SQLAlchemy.

    Pedido, itens, adicionais e a entrada de log são gravados na mesma
    sessão e confirmados em um único commit: ou tudo fica visível, ou nada.
    """

    def __init__(self, session_factory: sessionmaker, clock: Clock = _utc_now) -> None:
        self.session_factory = session_factory
        self.clock = clock

    @classmethod
    def from_path(cls, path: Optional[Path] = None, clock: Clock = _utc_now) -> "SqlOrderRepository":
        engine = get_engine(path)
        create_tables(engine)
        return cls(get_session_factory(engine), clock=clock)

    # --- Conversões ------------------------------------------------------
    @staticmethod
    def _to_record(order: ComposedOrder, order_id: str, numero: int, criado_em: datetime) -> PedidoRecord:
        details = order.details
        return PedidoRecord(
            id=order_id,
            order_number=numero,
            created_at=_naive_utc(criado_em),
            status=OrderStatus.PENDING.value,
            customer_name=details.customer_name,
            customer_phone=details.customer_phone,
            delivery_type=details.delivery_type.value,
            payment_method=details.payment_method.value,
            address=details.address or None,
            notes=details.notes or None,
            subtotal=to_money(order.subtotal),
            delivery_fee=to_money(order.delivery_fee),
            total=to_money(order.total),
            itens=[
                PedidoItemRecord(
                    line_index=indice,
                    line_item_id=li.id,
                    menu_item_id=li.item.id,
                    menu_item_name=li.item.name,
                    menu_item_description=li.item.description,
                    unit_price=to_money(li.item.unit_price),
                    quantity=li.quantity,
                    total_price=li.total_price,
                    notes=li.notes or None,
                    adicionais=[
                        PedidoItemAdicionalRecord(
                            add_on_id=a.add_on_id,
                            name=a.name,
                            unit_price=to_money(a.unit_price),
                            quantity=a.quantity,
                        )
                        for a in li.add_ons
                    ],
                )
                for indice, li in enumerate(order.line_items)
            ],
        )

    @staticmethod
    def _from_record(row: PedidoRecord) -> ComposedOrder:
        line_items = tuple(
            LineItem(
                id=item.line_item_id,
                item=CatalogItem(
                    id=item.menu_item_id,
                    name=item.menu_item_name,
                    description=item.menu_item_description or "",
                    unit_price=to_money(item.unit_price),
                ),
                add_ons=tuple(
                    LineItemAddOn(
                        add_on_id=a.add_on_id,
                        name=a.name,
                        unit_price=to_money(a.unit_price),
                        quantity=a.quantity,
                    )
                    for a in item.adicionais
                ),
                quantity=item.quantity,
                notes=item.notes or "",
            )
            for item in row.itens
        )
        return ComposedOrder(
            line_items=line_items,
            details=OrderDetails(
                delivery_type=DeliveryType(row.delivery_type),
                payment_method=PaymentMethod(row.payment_method),
                customer_name=row.customer_name,
                customer_phone=row.customer_phone,
                address=row.address or "",
                notes=row.notes or "",
            ),
            subtotal=to_money(row.subtotal),
            delivery_fee=to_money(row.delivery_fee),
            total=to_money(row.total),
            order_number=row.order_number,
            created_at=_as_utc(row.created_at),
            status=OrderStatus(row.status),
            order_id=row.id,
        )

    def _listar(self, session: Session, limit: int, status: Optional[OrderStatus] = None) -> List[ComposedOrder]:
        query = session.query(PedidoRecord)
        if status is not None:
            query = query.filter(PedidoRecord.status == status.value)
        rows = query.order_by(PedidoRecord.created_at.desc(), PedidoRecord.order_number.desc()).limit(limit).all()
        return [self._from_record(row) for row in rows]

    # --- Escrita ---------------------------------------------------------
    def persist(self, order: ComposedOrder) -> OrderReceipt:
        order_id = uuid4().hex
        criado_em = _as_utc(self.clock())
        session = self.session_factory()
        try:
            numero = (session.query(func.max(PedidoRecord.order_number)).scalar() or 0) + 1
            session.add(self._to_record(order, order_id, numero, criado_em))
            logging_service.registrar(
                session,
                "REGISTRAR_PEDIDO",
                order.details.customer_name,
                f"Pedido #{numero} total {format_brl(order.total)}",
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("Não foi possível registrar o pedido") from exc
        finally:
            session.close()
        return OrderReceipt(order_id=order_id, order_number=numero, created_at=criado_em)

    def mark_completed(self, order_id: str, usuario: str = "painel") -> None:
        session = self.session_factory()
        try:
            pedido = session.get(PedidoRecord, order_id)
            if pedido is None:
                raise OrderNotFoundError(f"Pedido {order_id} não encontrado")
            if pedido.status == OrderStatus.COMPLETED.value:
                return
            pedido.status = OrderStatus.COMPLETED.value
            logging_service.registrar(session, "CONCLUIR_PEDIDO", usuario, f"Pedido #{pedido.order_number} concluído")
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Não foi possível concluir o pedido {order_id}") from exc
        finally:
            session.close()

    # --- Consultas -------------------------------------------------------
    def _consultar(self, consulta: Callable[[Session], list]) -> list:
        session = self.session_factory()
        try:
            return consulta(session)
        except SQLAlchemyError as exc:
            raise StorageError("Falha ao consultar pedidos") from exc
        finally:
            session.close()

    def list_pending(self, limit: int = 50) -> List[ComposedOrder]:
        return self._consultar(lambda s: self._listar(s, limit, OrderStatus.PENDING))

    def list_recent(self, limit: int = 50) -> List[ComposedOrder]:
        return self._consultar(lambda s: self._listar(s, limit))

    def query_orders_since(self, since: Optional[datetime] = None) -> List[OrderRevenue]:
        def consulta(session: Session) -> List[OrderRevenue]:
            query = session.query(PedidoRecord.total, PedidoRecord.created_at)
            if since is not None:
                query = query.filter(PedidoRecord.created_at >= _naive_utc(since))
            return [
                OrderRevenue(total=to_money(total), created_at=_as_utc(created_at))
                for total, created_at in query.order_by(PedidoRecord.created_at).all()
            ]

        return self._consultar(consulta)

    def query_line_item_aggregates(self) -> List[ItemAggregate]:
        def consulta(session: Session) -> List[ItemAggregate]:
            rows = (
                session.query(PedidoItemRecord.menu_item_name, PedidoItemRecord.quantity, PedidoItemRecord.total_price)
                .order_by(PedidoItemRecord.id)
                .all()
            )
            return [
                ItemAggregate(name=name, quantity=quantity, revenue=to_money(total))
                for name, quantity, total in rows
            ]

        return self._consultar(consulta)

    def list_logs(self, limit: int = 100) -> List[LogEntry]:
        def consulta(session: Session) -> List[LogEntry]:
            return [
                LogEntry(id=r.id, acao=r.acao, detalhes=r.detalhes, usuario=r.usuario, criado_em=r.criado_em)
                for r in logging_service.listar(session, limit)
            ]

        return self._consultar(consulta)


__all__ = ["OrderRecorder", "MemoryOrderRepository", "SqlOrderRepository"]
