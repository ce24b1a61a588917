"""Exceptions spécifiques au domaine Product.

Les messages sont renvoyés tels quels au client (en espagnol).
"""


class ProductDomainException(Exception):
    """Classe de base pour les exceptions du domaine Product."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ProductNotFoundException(ProductDomainException):
    """Levée lorsqu'un produit spécifique n'est pas trouvé."""
    def __init__(self, product_id: int):
        super().__init__("Producto no encontrado")
        self.product_id = product_id


class MissingSearchQueryException(ProductDomainException):
    def __init__(self):
        super().__init__("Falta parámetro de búsqueda")


class InvalidProductDataException(ProductDomainException):
    """Levée lorsqu'un champ obligatoire du produit est absent ou vide."""
    def __init__(self):
        super().__init__("Faltan datos requeridos")
