from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from models import ComposedOrder, DeliveryType, ItemAggregate, OrderDetails, PaymentMethod
from services.cart_service import Cart
from services.errors import ValidationError
from services.metrics_service import MetricsService

AGORA = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


class RepositorioAgregado:
    def __init__(self, linhas):
        self.linhas = linhas

    def query_line_item_aggregates(self):
        return list(self.linhas)

    def query_orders_since(self, since=None):
        return []


def _registrar(repo, relogio, quando, builder, catalog, item_id="1", quantidade=1):
    cart = Cart()
    cart.add(builder.build(catalog.get_item(item_id), {}, quantity=quantidade))
    relogio.agora = quando
    subtotal = cart.total_price()
    return repo.persist(
        ComposedOrder(
            line_items=cart.items,
            details=OrderDetails(
                delivery_type=DeliveryType.PICKUP,
                payment_method=PaymentMethod.PIX,
                customer_name="Cliente",
                customer_phone="1199999999",
            ),
            subtotal=subtotal,
            delivery_fee=Decimal("0"),
            total=subtotal,
        )
    )


def test_historico_vazio_tem_series_zeradas(memory_repo):
    metrics = MetricsService(memory_repo, utc_offset_hours=-3)

    diario = metrics.daily_revenue(30, now=AGORA)
    mensal = metrics.monthly_revenue(12, now=AGORA)

    assert len(diario) == 30
    assert all(d.revenue == 0 for d in diario)
    assert diario[0].date == date(2026, 9, 20)
    assert diario[-1].date == date(2026, 10, 19)
    assert [d.date for d in diario] == sorted(d.date for d in diario)
    assert len(mensal) == 12
    assert mensal[0].month == "2025-11"
    assert mensal[-1].month == "2026-10"
    assert all(m.revenue == 0 for m in mensal)
    assert metrics.total_orders() == 0
    assert metrics.total_revenue() == 0
    assert metrics.average_ticket() == 0


def test_faturamento_diario_agrupa_no_fuso_local(memory_repo, relogio, builder, catalog):
    # 02:00 UTC do dia 19 ainda é dia 18 em Brasília
    _registrar(memory_repo, relogio, datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc), builder, catalog)
    _registrar(memory_repo, relogio, datetime(2026, 10, 19, 14, 0, tzinfo=timezone.utc), builder, catalog, "2")
    _registrar(memory_repo, relogio, datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc), builder, catalog, "2")
    metrics = MetricsService(memory_repo, utc_offset_hours=-3)

    diario = {d.date: d.revenue for d in metrics.daily_revenue(30, now=AGORA)}

    assert diario[date(2026, 10, 18)] == Decimal("25.00")
    assert diario[date(2026, 10, 19)] == Decimal("60.00")
    assert metrics.today_revenue(now=AGORA) == Decimal("60.00")


def test_pedidos_fora_da_janela_sao_ignorados(memory_repo, relogio, builder, catalog):
    _registrar(memory_repo, relogio, datetime(2026, 8, 1, 15, 0, tzinfo=timezone.utc), builder, catalog)
    _registrar(memory_repo, relogio, datetime(2025, 10, 15, 15, 0, tzinfo=timezone.utc), builder, catalog)
    _registrar(memory_repo, relogio, AGORA - timedelta(days=2), builder, catalog, "2", quantidade=2)
    metrics = MetricsService(memory_repo, utc_offset_hours=-3)

    diario = metrics.daily_revenue(30, now=AGORA)
    mensal = {m.month: m.revenue for m in metrics.monthly_revenue(12, now=AGORA)}

    assert len(diario) == 30
    assert sum(d.revenue for d in diario) == Decimal("60.00")
    assert mensal["2026-08"] == Decimal("25.00")
    assert mensal["2026-10"] == Decimal("60.00")
    assert "2025-10" not in mensal
    assert sum(mensal.values()) == Decimal("85.00")
    assert metrics.total_orders() == 3
    assert metrics.total_revenue() == Decimal("110.00")


def test_mais_vendidos_ordena_por_quantidade():
    repo = RepositorioAgregado(
        [
            ItemAggregate(name="A", quantity=10, revenue=Decimal("100.00")),
            ItemAggregate(name="B", quantity=15, revenue=Decimal("50.00")),
        ]
    )

    ranking = MetricsService(repo).top_items()

    assert [t.name for t in ranking] == ["B", "A"]


def test_mais_vendidos_soma_por_nome_e_mantem_empate_estavel():
    repo = RepositorioAgregado(
        [
            ItemAggregate(name="Clássico", quantity=2, revenue=Decimal("50.00")),
            ItemAggregate(name="Especial", quantity=3, revenue=Decimal("90.00")),
            ItemAggregate(name="Clássico", quantity=1, revenue=Decimal("31.00")),
            ItemAggregate(name="Vegano", quantity=1, revenue=Decimal("28.00")),
            ItemAggregate(name="Kids", quantity=1, revenue=Decimal("18.00")),
        ]
    )

    ranking = MetricsService(repo).top_items(n=3)

    assert [(t.name, t.quantity, t.revenue) for t in ranking] == [
        ("Clássico", 3, Decimal("81.00")),
        ("Especial", 3, Decimal("90.00")),
        ("Vegano", 1, Decimal("28.00")),
    ]


def test_snapshot_reune_metricas(memory_repo, relogio, builder, catalog):
    _registrar(memory_repo, relogio, AGORA, builder, catalog, "1", quantidade=2)
    _registrar(memory_repo, relogio, AGORA - timedelta(days=40), builder, catalog, "2")
    metrics = MetricsService(memory_repo, utc_offset_hours=-3)

    snapshot = metrics.snapshot(now=AGORA)

    assert snapshot.total_orders == 2
    assert snapshot.total_revenue == Decimal("80.00")
    assert snapshot.average_ticket == Decimal("40.00")
    assert snapshot.today_revenue == Decimal("50.00")
    assert snapshot.top_items[0].name == "Na Brasa Clássico"
    assert len(snapshot.daily_revenue) == 30
    assert len(snapshot.monthly_revenue) == 12


def test_falha_na_consulta_propaga():
    class RepositorioQuebrado:
        def query_orders_since(self, since=None):
            raise RuntimeError("sem conexão")

    with pytest.raises(RuntimeError):
        MetricsService(RepositorioQuebrado()).total_revenue()


def test_mais_vendidos_recusa_tamanho_negativo():
    repo = RepositorioAgregado([ItemAggregate(name="A", quantity=1, revenue=Decimal("10.00"))])
    metrics = MetricsService(repo)

    with pytest.raises(ValidationError):
        metrics.top_items(n=-1)
    assert metrics.top_items(n=0) == []
