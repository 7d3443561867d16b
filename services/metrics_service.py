"""Métricas do painel de vendas.

Os valores vêm do repositório de pedidos e são somados em ``Decimal``.
Dias e meses são calculados num fuso fixo (``NABRASA_UTC_OFFSET``), e as
séries diária e mensal sempre têm o tamanho pedido, com zero nos períodos
sem venda, para o gráfico não ter buracos.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from core import config
from core.money import ZERO, sum_money, to_money
from models import DailyRevenue, MetricsSnapshot, MonthlyRevenue, OrderRevenue, TopItem
from repositories.order_repository import OrderRecorder
from services.errors import ValidationError


class MetricsService:
    def __init__(self, recorder: OrderRecorder, utc_offset_hours: Optional[int] = None) -> None:
        self.recorder = recorder
        horas = config.UTC_OFFSET_HOURS if utc_offset_hours is None else utc_offset_hours
        self.tz = timezone(timedelta(hours=horas))

    # --- helpers ---------------------------------------------------------
    def _hoje(self, now: Optional[datetime]) -> date:
        agora = now or datetime.now(timezone.utc)
        if agora.tzinfo is None:
            agora = agora.replace(tzinfo=timezone.utc)
        return agora.astimezone(self.tz).date()

    def _inicio_do_dia(self, dia: date) -> datetime:
        return datetime.combine(dia, time.min, tzinfo=self.tz)

    def _data_local(self, pedido: OrderRevenue) -> date:
        return pedido.created_at.astimezone(self.tz).date()

    @staticmethod
    def _meses(hoje: date, months: int) -> List[Tuple[int, int]]:
        meses = []
        ano, mes = hoje.year, hoje.month
        for _ in range(months):
            meses.append((ano, mes))
            mes -= 1
            if mes == 0:
                ano, mes = ano - 1, 12
        meses.reverse()
        return meses

    # --- Totais ----------------------------------------------------------
    def total_orders(self) -> int:
        return len(self.recorder.query_orders_since(None))

    def total_revenue(self) -> Decimal:
        return sum_money(p.total for p in self.recorder.query_orders_since(None))

    def average_ticket(self) -> Decimal:
        pedidos = self.recorder.query_orders_since(None)
        if not pedidos:
            return ZERO
        return to_money(sum_money(p.total for p in pedidos) / len(pedidos))

    def today_revenue(self, now: Optional[datetime] = None) -> Decimal:
        return self.daily_revenue(days=1, now=now)[0].revenue

    # --- Ranking ---------------------------------------------------------
    def top_items(self, n: int = 5) -> List[TopItem]:
        """Itens mais vendidos por quantidade.

        Empates mantêm a ordem em que o item apareceu primeiro nos pedidos
        (ordenação estável, sem desempate por faturamento).
        """
        if n < 0:
            raise ValidationError("O ranking não aceita tamanho negativo")
        agrupado: Dict[str, List] = {}
        for linha in self.recorder.query_line_item_aggregates():
            atual = agrupado.setdefault(linha.name, [0, ZERO])
            atual[0] += linha.quantity
            atual[1] += to_money(linha.revenue)
        ranking = [TopItem(name=nome, quantity=qtd, revenue=receita) for nome, (qtd, receita) in agrupado.items()]
        ranking.sort(key=lambda t: t.quantity, reverse=True)
        return ranking[:n]

    # --- Séries ----------------------------------------------------------
    def daily_revenue(self, days: int = 30, now: Optional[datetime] = None) -> List[DailyRevenue]:
        if days < 1:
            raise ValidationError("A série diária precisa de pelo menos 1 dia")
        hoje = self._hoje(now)
        datas = [hoje - timedelta(days=days - 1 - i) for i in range(days)]
        buckets: Dict[date, Decimal] = {d: ZERO for d in datas}
        for pedido in self.recorder.query_orders_since(self._inicio_do_dia(datas[0])):
            dia = self._data_local(pedido)
            if dia in buckets:
                buckets[dia] += to_money(pedido.total)
        return [DailyRevenue(date=d, revenue=buckets[d]) for d in datas]

    def monthly_revenue(self, months: int = 12, now: Optional[datetime] = None) -> List[MonthlyRevenue]:
        if months < 1:
            raise ValidationError("A série mensal precisa de pelo menos 1 mês")
        meses = self._meses(self._hoje(now), months)
        buckets: Dict[Tuple[int, int], Decimal] = {m: ZERO for m in meses}
        ano, mes = meses[0]
        for pedido in self.recorder.query_orders_since(self._inicio_do_dia(date(ano, mes, 1))):
            dia = self._data_local(pedido)
            chave = (dia.year, dia.month)
            if chave in buckets:
                buckets[chave] += to_money(pedido.total)
        return [MonthlyRevenue(month=f"{a:04d}-{m:02d}", revenue=buckets[(a, m)]) for a, m in meses]

    def snapshot(self, now: Optional[datetime] = None, top: int = 5) -> MetricsSnapshot:
        pedidos = self.recorder.query_orders_since(None)
        receita = sum_money(p.total for p in pedidos)
        diario = self.daily_revenue(days=30, now=now)
        return MetricsSnapshot(
            total_orders=len(pedidos),
            total_revenue=receita,
            average_ticket=to_money(receita / len(pedidos)) if pedidos else ZERO,
            today_revenue=diario[-1].revenue,
            top_items=tuple(self.top_items(top)),
            daily_revenue=tuple(diario),
            monthly_revenue=tuple(self.monthly_revenue(months=12, now=now)),
        )


__all__ = ["MetricsService"]
