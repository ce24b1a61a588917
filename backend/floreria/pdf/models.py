"""
Données d'entrée des générateurs PDF.

Un comprobante se construit indifféremment depuis une commande en attente
(ordenes + orden_detalle) ou depuis l'archive (pedidos_entregados).
"""
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class ReceiptLine(BaseModel):
    producto: str
    cantidad: int
    precio: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.precio * self.cantidad


class ReceiptData(BaseModel):
    orden_id: int
    cliente: str
    fecha: datetime
    total: Decimal
    productos: List[ReceiptLine] = Field(default_factory=list)
