"""Log de auditoria gravado na mesma transação da operação."""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from models.records import LogRecord


def registrar(session: Session, acao: str, usuario: Optional[str], detalhes: str) -> LogRecord:
    entrada = LogRecord(
        acao=acao,
        usuario=usuario,
        detalhes=detalhes,
        criado_em=datetime.now(timezone.utc).replace(tzinfo=None),
    )
    session.add(entrada)
    return entrada


def listar(session: Session, limit: int = 100) -> List[LogRecord]:
    return (
        session.query(LogRecord)
        .order_by(LogRecord.criado_em.desc(), LogRecord.id.desc())
        .limit(limit)
        .all()
    )


__all__ = ["registrar", "listar"]
