"""Exceptions spécifiques au domaine Order."""


class OrderDomainException(Exception):
    """Classe de base pour les exceptions du domaine Order."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidOrderDataException(OrderDomainException):
    """Utilisateur absent, panier vide ou quantité inférieure à 1."""
    def __init__(self):
        super().__init__("Datos incompletos para crear la orden")


class OrderUserNotFoundException(OrderDomainException):
    def __init__(self, user_id: int):
        super().__init__("Usuario no encontrado")
        self.user_id = user_id


class OrderCreationFailedException(OrderDomainException):
    """Levée lorsque la transaction de création échoue (rien n'est enregistré)."""
    def __init__(self):
        super().__init__("Error al procesar la orden")
