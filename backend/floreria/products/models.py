from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field

# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    nombre: str = Field(index=True, max_length=255)
    descripcion: Optional[str] = Field(default=None)
    precio: Decimal = Field(max_digits=10, decimal_places=2)
    imagen: Optional[str] = Field(default=None)
    temporada_flor: str = Field(index=True, max_length=100)
    origen: str = Field(index=True, max_length=100)
    pais: str = Field(max_length=100)


class Product(ProductBase, table=True):
    __tablename__ = "productos"

    id: Optional[int] = Field(default=None, primary_key=True)


# Schémas API pour Product
class ProductRead(ProductBase):
    id: int


class ProductPayload(SQLModel):
    """Corps des requêtes admin de création et de modification.

    Tous les champs sont optionnels ici : les champs obligatoires sont
    contrôlés par le service pour répondre 400 et non 422.
    """
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    precio: Optional[Decimal] = None
    imagen: Optional[str] = None
    temporada_flor: Optional[str] = None
    origen: Optional[str] = None
    pais: Optional[str] = None


class ProductCreatedResponse(SQLModel):
    id: int


class ProductUpdatedResponse(SQLModel):
    success: bool = True
    producto: ProductRead
