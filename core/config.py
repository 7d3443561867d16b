"""Configuração da loja lida de variáveis de ambiente."""
import os
from decimal import Decimal
from pathlib import Path


def _default_db_dir() -> Path:
    # Banco fora do repositório por padrão. Pode ser sobrescrito por NABRASA_DB_DIR.
    configured = os.environ.get("NABRASA_DB_DIR")
    if configured:
        return Path(configured)
    return Path.home() / ".nabrasa"


DEFAULT_DB_DIR = _default_db_dir()
DEFAULT_DB_NAME = os.environ.get("NABRASA_DB_NAME", "pedidos.db")
DB_PATH = Path(os.environ.get("NABRASA_DB_PATH", DEFAULT_DB_DIR / DEFAULT_DB_NAME))

# Taxa fixa de entrega, não editável pelo cliente.
DELIVERY_FEE = Decimal(os.environ.get("NABRASA_TAXA_ENTREGA", "3.00"))

STORE_NAME = os.environ.get("NABRASA_NOME_LOJA", "NA BRASA BURGUER")
WHATSAPP_NUMBER = os.environ.get("NABRASA_WHATSAPP", "5518996277667")

# Fuso fixo usado para agrupar faturamento por dia/mês (Brasília).
UTC_OFFSET_HOURS = int(os.environ.get("NABRASA_UTC_OFFSET", "-3"))


__all__ = [
    "DB_PATH",
    "DELIVERY_FEE",
    "STORE_NAME",
    "WHATSAPP_NUMBER",
    "UTC_OFFSET_HOURS",
]
