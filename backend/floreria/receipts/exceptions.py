"""Exceptions spécifiques aux comprobantes et exports PDF."""


class ReceiptDomainException(Exception):
    """Classe de base pour les exceptions du domaine Receipt."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ReceiptNotFoundException(ReceiptDomainException):
    """Ni archive ni commande en attente pour cet ID."""
    def __init__(self, order_id: int):
        super().__init__("Comprobante no encontrado")
        self.order_id = order_id


class NoOrdersInRangeException(ReceiptDomainException):
    def __init__(self):
        super().__init__("No hay pedidos en ese rango")


class SummaryEmailFailedException(ReceiptDomainException):
    """Le résumé est enregistré sur disque mais n'a pas pu être envoyé."""
    def __init__(self, filename: str):
        super().__init__("PDF generado y guardado, pero falló el envío de correo.")
        self.filename = filename
