from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from floreria.orders.models import OrderLine
from floreria.pdf.models import ReceiptData, ReceiptLine


class DeliveredOrder(SQLModel, table=True):
    """Archive d'une commande livrée, écrite une seule fois.

    ``productos`` garde les lignes telles qu'elles étaient au moment de
    la livraison : liste JSON de ``{producto, cantidad, precio}``.
    """
    __tablename__ = "pedidos_entregados"

    id: Optional[int] = Field(default=None, primary_key=True)
    orden_id: int = Field(index=True)
    usuario_id: int = Field(index=True)
    cliente: str = Field(max_length=255)
    fecha: datetime = Field(index=True)  # date de la commande d'origine
    total: Decimal = Field(max_digits=10, decimal_places=2)
    productos: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    def to_receipt(self) -> ReceiptData:
        return ReceiptData(
            orden_id=self.orden_id,
            cliente=self.cliente,
            fecha=self.fecha,
            total=self.total,
            productos=[ReceiptLine(**line) for line in self.productos],
        )


class DeliveredOrderRead(SQLModel):
    id: int
    orden_id: int
    usuario_id: int
    cliente: str
    fecha: datetime
    total: Decimal
    productos: List[OrderLine] = []


class DeliveryResponse(SQLModel):
    success: bool = True
    mensaje: str = "Pedido entregado y correo enviado."
