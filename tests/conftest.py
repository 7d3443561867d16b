import os
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from database.db import get_session_factory, reset_database  # noqa: E402
from models import DeliveryType, OrderDetails, PaymentMethod  # noqa: E402
from repositories.order_repository import MemoryOrderRepository, SqlOrderRepository  # noqa: E402
from services.catalog_service import default_catalog  # noqa: E402
from services.line_item_service import LineItemBuilder  # noqa: E402
from services.order_service import OrderComposer  # noqa: E402


class RelogioFixo:
    """Relógio controlado pelos testes para datar os pedidos."""

    def __init__(self, agora: datetime) -> None:
        self.agora = agora

    def __call__(self) -> datetime:
        return self.agora


@pytest.fixture(autouse=True)
def temp_db_path(tmp_path):
    """Garante que cada teste use um banco isolado fora do repositório."""
    db_path = tmp_path / "pedidos.db"
    os.environ["NABRASA_DB_PATH"] = str(db_path)
    yield db_path


@pytest.fixture
def relogio():
    return RelogioFixo(datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def builder(catalog):
    return LineItemBuilder(catalog)


@pytest.fixture
def memory_repo(relogio):
    return MemoryOrderRepository(clock=relogio)


@pytest.fixture
def sql_repo(temp_db_path, relogio):
    engine = reset_database(temp_db_path)
    yield SqlOrderRepository(get_session_factory(engine), clock=relogio)
    engine.dispose()


@pytest.fixture
def composer(memory_repo):
    return OrderComposer(memory_repo, delivery_fee=Decimal("3.00"), store_name="NA BRASA BURGUER")


@pytest.fixture
def retirada():
    return OrderDetails(
        delivery_type=DeliveryType.PICKUP,
        payment_method=PaymentMethod.PIX,
        customer_name="Maria",
        customer_phone="(18) 99999-9999",
    )


@pytest.fixture
def entrega():
    return OrderDetails(
        delivery_type=DeliveryType.DELIVERY,
        payment_method=PaymentMethod.CASH,
        customer_name="João",
        customer_phone="(18) 98888-7777",
        address="Rua das Flores, 10 - Centro",
        notes="Troco para 100",
    )
