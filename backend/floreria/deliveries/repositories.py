import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.deliveries.models import DeliveredOrder
from floreria.orders.models import Order, OrderDetail, OrderProduct, PendingOrder

logger = logging.getLogger(__name__)


class SQLAlchemyDeliveryRepository:
    """Repository de l'archive des commandes livrées."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def archive_and_delete(self, pending: PendingOrder) -> Optional[DeliveredOrder]:
        """Archive la commande puis supprime ses lignes et la commande, en une seule transaction.

        Retourne None (rien n'est modifié) si la commande a déjà été supprimée
        par une livraison concurrente.
        """
        archive = DeliveredOrder(
            orden_id=pending.id,
            usuario_id=pending.usuario_id,
            cliente=pending.cliente,
            fecha=pending.fecha,
            total=pending.total,
            productos=[
                {"producto": line.producto, "cantidad": line.cantidad, "precio": float(line.precio)}
                for line in pending.productos
            ],
        )
        try:
            self.db.add(archive)
            await self.db.flush()
            await self.db.execute(delete(OrderDetail).where(OrderDetail.orden_id == pending.id))
            await self.db.execute(delete(OrderProduct).where(OrderProduct.orden_id == pending.id))
            result = await self.db.execute(delete(Order).where(Order.id == pending.id))
            if result.rowcount != 1:
                await self.db.rollback()
                logger.warning(f"[DeliveryRepository] Commande {pending.id} déjà livrée, archive annulée.")
                return None
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"[DeliveryRepository] Échec archivage commande {pending.id}, rollback: {e}", exc_info=True)
            raise
        logger.info(f"[DeliveryRepository] Commande {pending.id} archivée (archive ID {archive.id}).")
        return archive

    async def list_all(self) -> List[DeliveredOrder]:
        stmt = select(DeliveredOrder).order_by(DeliveredOrder.fecha.desc(), DeliveredOrder.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_between(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[DeliveredOrder]:
        """Archives avec start <= fecha < end ; une borne absente ne restreint rien."""
        stmt = select(DeliveredOrder)
        if start is not None:
            stmt = stmt.where(DeliveredOrder.fecha >= start)
        if end is not None:
            stmt = stmt.where(DeliveredOrder.fecha < end)
        stmt = stmt.order_by(DeliveredOrder.fecha.desc(), DeliveredOrder.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, delivered_id: int) -> Optional[DeliveredOrder]:
        return await self.db.get(DeliveredOrder, delivered_id)

    async def get_by_order_id(self, orden_id: int) -> Optional[DeliveredOrder]:
        stmt = (
            select(DeliveredOrder)
            .where(DeliveredOrder.orden_id == orden_id)
            .order_by(DeliveredOrder.id.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def delete(self, delivered: DeliveredOrder) -> None:
        delivered_id = delivered.id
        await self.db.delete(delivered)
        await self.db.commit()
        logger.info(f"[DeliveryRepository] Archive ID {delivered_id} supprimée.")
