"""
Modèles des commandes en attente.

Une commande vit dans ``ordenes`` avec ses lignes en double exemplaire :
``orden_productos`` (relationnel) et ``orden_detalle`` (nom et prix figés
au moment de la commande). Les commissions d'affiliés vont dans ``referidos``.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlmodel import SQLModel, Field

from floreria.pdf.models import ReceiptData, ReceiptLine


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# --- Tables ---

class Order(SQLModel, table=True):
    __tablename__ = "ordenes"

    id: Optional[int] = Field(default=None, primary_key=True)
    usuario_id: int = Field(foreign_key="usuarios.id", index=True)
    total: Decimal = Field(max_digits=10, decimal_places=2)
    fecha: datetime = Field(default_factory=utc_now, nullable=False)


class OrderProduct(SQLModel, table=True):
    __tablename__ = "orden_productos"

    id: Optional[int] = Field(default=None, primary_key=True)
    orden_id: int = Field(foreign_key="ordenes.id", index=True)
    producto_id: int
    cantidad: int
    precio: Decimal = Field(max_digits=10, decimal_places=2)


class OrderDetail(SQLModel, table=True):
    __tablename__ = "orden_detalle"

    id: Optional[int] = Field(default=None, primary_key=True)
    orden_id: int = Field(foreign_key="ordenes.id", index=True)
    producto_id: int
    nombre: str = Field(max_length=255)
    precio: Decimal = Field(max_digits=10, decimal_places=2)
    cantidad: int


class Referral(SQLModel, table=True):
    """Commission due à un affilié pour une ligne de commande."""
    __tablename__ = "referidos"

    id: Optional[int] = Field(default=None, primary_key=True)
    afiliado_id: int = Field(foreign_key="usuarios.id", index=True)
    producto_id: int
    monto: Decimal = Field(max_digits=10, decimal_places=2)
    fecha: datetime = Field(default_factory=utc_now, nullable=False)


# --- Schémas API ---

class CartItem(SQLModel):
    id: int
    nombre: str
    precio: Decimal
    cantidad: int

    @property
    def subtotal(self) -> Decimal:
        return self.precio * self.cantidad


class OrderCreate(SQLModel):
    # Optionnels ici : l'absence est contrôlée par le service (400)
    usuario_id: Optional[int] = None
    carrito: List[CartItem] = []
    ref: Optional[str] = None


class OrderCreatedResponse(SQLModel):
    success: bool = True
    orden_id: int


class OrderLine(SQLModel):
    """Ligne figée telle qu'elle apparaît sur un comprobante."""
    producto: str
    cantidad: int
    precio: Decimal


class PendingOrderRead(SQLModel):
    id: int
    usuario_id: int
    fecha: datetime
    total: Decimal
    cliente: str
    productos: List[OrderLine] = []


class PendingOrder(PendingOrderRead):
    """Commande en attente avec l'adresse du client, usage interne."""
    email: str

    def to_receipt(self) -> ReceiptData:
        return ReceiptData(
            orden_id=self.id,
            cliente=self.cliente,
            fecha=self.fecha,
            total=self.total,
            productos=[ReceiptLine(**line.model_dump()) for line in self.productos],
        )
