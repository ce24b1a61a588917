"""Exceptions spécifiques au domaine Delivery."""


class DeliveryDomainException(Exception):
    """Classe de base pour les exceptions du domaine Delivery."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class PendingOrderNotFoundException(DeliveryDomainException):
    def __init__(self, order_id: int):
        super().__init__("Orden no encontrada")
        self.order_id = order_id


class DeliveredOrderNotFoundException(DeliveryDomainException):
    def __init__(self, delivered_id: int):
        super().__init__("Pedido entregado no encontrado")
        self.delivered_id = delivered_id


class DeliveryFailedException(DeliveryDomainException):
    """L'archivage a échoué ; la transaction est annulée, rien n'a changé."""
    def __init__(self, order_id: int):
        super().__init__("Error al entregar pedido")
        self.order_id = order_id


class ReceiptEmailFailedException(DeliveryDomainException):
    """La commande est archivée mais le comprobante n'a pas pu être envoyé."""
    def __init__(self, order_id: int):
        super().__init__("Pedido entregado, pero falló el envío de correo.")
        self.order_id = order_id
