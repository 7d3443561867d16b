from typing import Optional
from urllib.parse import quote

from core import config


def whatsapp_url(message: str, phone: Optional[str] = None) -> str:
    numero = "".join(ch for ch in (phone or config.WHATSAPP_NUMBER) if ch.isdigit())
    return f"https://wa.me/{numero}?text={quote(message, safe='')}"


__all__ = ["whatsapp_url"]
