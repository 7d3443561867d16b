from dataclasses import replace
from decimal import Decimal
from urllib.parse import unquote

import pytest

from models import DeliveryType
from services.errors import CatalogReferenceError, MissingAddress
from services.metrics_service import MetricsService
from services.session_service import OrderingSession
from services.whatsapp import whatsapp_url


@pytest.fixture
def sessao(catalog, memory_repo):
    return OrderingSession(catalog, memory_repo, delivery_fee=Decimal("3.00"), whatsapp_number="55 18 99627-7667")


def test_fluxo_completo_retirada(sessao, retirada, memory_repo):
    item = sessao.add_to_cart("1", {"ovo": 2}, quantity=2)

    assert item.total_price == Decimal("62.00")
    assert sessao.cart.total_price() == Decimal("62.00")
    assert sessao.totals(DeliveryType.DELIVERY).total == Decimal("65.00")

    resultado = sessao.checkout(retirada)

    assert resultado.order.total == Decimal("62.00")
    assert resultado.whatsapp_url.startswith("https://wa.me/5518996277667?text=")
    assert unquote(resultado.whatsapp_url.split("text=", 1)[1]) == resultado.message
    assert "Na Brasa Clássico" in resultado.message
    assert sessao.cart.is_empty
    assert len(memory_repo.orders) == 1


def test_fluxo_completo_delivery(sessao, entrega):
    sessao.add_to_cart("1", {"ovo": 2}, quantity=2)

    resultado = sessao.checkout(entrega)

    assert resultado.order.total == Decimal("65.00")
    assert "🛵 *Taxa de Entrega:* R$ 3,00" in resultado.message


def test_checkout_sem_endereco_mantem_carrinho(sessao, entrega, memory_repo):
    sessao.add_to_cart("2")

    with pytest.raises(MissingAddress):
        sessao.checkout(replace(entrega, address=""))

    assert len(sessao.cart) == 1
    assert memory_repo.orders == []


def test_sessoes_tem_carrinhos_independentes(catalog, memory_repo):
    primeira = OrderingSession(catalog, memory_repo)
    segunda = OrderingSession(catalog, memory_repo)

    primeira.add_to_cart("1")

    assert len(primeira.cart) == 1
    assert segunda.cart.is_empty


def test_item_fora_do_cardapio(sessao):
    with pytest.raises(CatalogReferenceError):
        sessao.add_to_cart("99")


def test_edicao_do_carrinho_pela_sessao(sessao):
    item = sessao.add_to_cart("1")
    outro = sessao.add_to_cart("2")

    sessao.update_quantity(item.id, 3)
    sessao.remove(outro.id)

    assert sessao.cart.total_item_count() == 3
    assert sessao.cart.total_price() == Decimal("75.00")


def test_painel_reflete_pedidos_da_sessao(sessao, retirada, memory_repo, relogio):
    sessao.add_to_cart("1", quantity=2)
    sessao.checkout(retirada)
    sessao.add_to_cart("2")
    sessao.checkout(retirada)

    snapshot = MetricsService(memory_repo, utc_offset_hours=-3).snapshot(now=relogio.agora)

    assert snapshot.total_orders == 2
    assert snapshot.total_revenue == Decimal("80.00")
    assert snapshot.today_revenue == Decimal("80.00")
    assert [t.name for t in snapshot.top_items] == ["Na Brasa Clássico", "Na Brasa Especial"]


def test_link_whatsapp_codifica_texto():
    url = whatsapp_url("Olá! 🍔 R$ 10,00\nfim", "5511999990000")

    assert url.startswith("https://wa.me/5511999990000?text=")
    assert " " not in url
    assert "\n" not in url
    assert unquote(url.split("text=", 1)[1]) == "Olá! 🍔 R$ 10,00\nfim"
