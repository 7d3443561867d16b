"""Tabelas SQLAlchemy dos pedidos registrados e do log de auditoria."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from database.db import Base


class PedidoRecord(Base):
    __tablename__ = "pedidos"

    id = Column(String(32), primary_key=True)
    order_number = Column(Integer, unique=True, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False)
    customer_name = Column(String(120), nullable=False)
    customer_phone = Column(String(40), nullable=False)
    delivery_type = Column(String(20), nullable=False)
    payment_method = Column(String(20), nullable=False)
    address = Column(Text)
    notes = Column(Text)
    subtotal = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    itens = relationship(
        "PedidoItemRecord",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoItemRecord.line_index",
    )


class PedidoItemRecord(Base):
    __tablename__ = "pedido_itens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(String(32), ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    line_index = Column(Integer, nullable=False)
    line_item_id = Column(String(32), nullable=False)
    menu_item_id = Column(String(50), nullable=False)
    menu_item_name = Column(String(120), nullable=False)
    menu_item_description = Column(Text)
    unit_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text)

    pedido = relationship("PedidoRecord", back_populates="itens")
    adicionais = relationship(
        "PedidoItemAdicionalRecord",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="PedidoItemAdicionalRecord.id",
    )


class PedidoItemAdicionalRecord(Base):
    __tablename__ = "pedido_item_adicionais"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_item_id = Column(Integer, ForeignKey("pedido_itens.id", ondelete="CASCADE"), nullable=False, index=True)
    add_on_id = Column(String(50), nullable=False)
    name = Column(String(120), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    item = relationship("PedidoItemRecord", back_populates="adicionais")


class LogRecord(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    acao = Column(String(50), nullable=False)
    usuario = Column(String(120))
    detalhes = Column(Text)
    criado_em = Column(DateTime, nullable=False)
