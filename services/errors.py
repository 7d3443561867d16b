"""Exceções do fluxo de pedidos."""


class OrderError(RuntimeError):
    """Erro base para operações de carrinho e pedido."""


class ValidationError(OrderError):
    """Entrada inválida, rejeitada antes de chegar na persistência."""


class MissingCustomerInfo(ValidationError):
    pass


class MissingAddress(ValidationError):
    pass


class CatalogReferenceError(OrderError):
    """Item ou adicional que não existe no cardápio."""


class StorageError(OrderError):
    """Falha ao registrar ou consultar pedidos."""


class OrderNotFoundError(StorageError):
    pass


class SubmissionInProgressError(OrderError):
    pass


__all__ = [
    "OrderError",
    "ValidationError",
    "MissingCustomerInfo",
    "MissingAddress",
    "CatalogReferenceError",
    "StorageError",
    "OrderNotFoundError",
    "SubmissionInProgressError",
]
