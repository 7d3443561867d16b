from enum import Enum


class DeliveryType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"

    @property
    def label(self) -> str:
        return "Delivery" if self is DeliveryType.DELIVERY else "Retirada"


class PaymentMethod(str, Enum):
    CASH = "dinheiro"
    PIX = "pix"
    CARD = "cartao"

    @property
    def label(self) -> str:
        return {
            PaymentMethod.CASH: "Dinheiro",
            PaymentMethod.PIX: "PIX",
            PaymentMethod.CARD: "Cartão",
        }[self]


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
