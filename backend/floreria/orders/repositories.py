import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.orders.interfaces.repositories import AbstractOrderRepository
from floreria.orders.models import (
    CartItem, Order, OrderDetail, OrderLine, OrderProduct, PendingOrder, Referral,
)
from floreria.users.models import User

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(AbstractOrderRepository):
    """Implémentation SQLAlchemy du repository des commandes."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def add_order(self, usuario_id: int, total: Decimal) -> Order:
        order = Order(usuario_id=usuario_id, total=total)
        self.db.add(order)
        await self.db.flush()
        logger.debug(f"[OrderRepository] Commande insérée (non validée) ID: {order.id}")
        return order

    async def add_line_items(self, orden_id: int, items: List[CartItem]) -> None:
        for item in items:
            self.db.add(OrderProduct(
                orden_id=orden_id, producto_id=item.id, cantidad=item.cantidad, precio=item.precio,
            ))
            self.db.add(OrderDetail(
                orden_id=orden_id, producto_id=item.id, nombre=item.nombre,
                precio=item.precio, cantidad=item.cantidad,
            ))
        await self.db.flush()

    async def add_referrals(self, afiliado_id: int, commissions: List[Tuple[int, Decimal]]) -> None:
        for producto_id, monto in commissions:
            self.db.add(Referral(afiliado_id=afiliado_id, producto_id=producto_id, monto=monto))
        await self.db.flush()

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def _lines_by_order(self, order_ids: List[int]) -> Dict[int, List[OrderLine]]:
        lines: Dict[int, List[OrderLine]] = defaultdict(list)
        if not order_ids:
            return lines
        stmt = (
            select(OrderDetail)
            .where(OrderDetail.orden_id.in_(order_ids))
            .order_by(OrderDetail.id)
        )
        result = await self.db.execute(stmt)
        for detail in result.scalars().all():
            lines[detail.orden_id].append(
                OrderLine(producto=detail.nombre, cantidad=detail.cantidad, precio=detail.precio)
            )
        return lines

    @staticmethod
    def _to_pending(order: Order, user: User, lines: List[OrderLine]) -> PendingOrder:
        return PendingOrder(
            id=order.id,
            usuario_id=order.usuario_id,
            fecha=order.fecha,
            total=order.total,
            cliente=user.full_name,
            email=user.email,
            productos=lines,
        )

    async def get_pending(self, order_id: int) -> Optional[PendingOrder]:
        logger.debug(f"[OrderRepository] Lecture commande en attente ID: {order_id}")
        stmt = (
            select(Order, User)
            .join(User, Order.usuario_id == User.id)
            .where(Order.id == order_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            return None
        order, user = row
        lines = await self._lines_by_order([order.id])
        return self._to_pending(order, user, lines.get(order.id, []))

    async def list_pending(self) -> List[PendingOrder]:
        stmt = (
            select(Order, User)
            .join(User, Order.usuario_id == User.id)
            .order_by(Order.fecha.desc(), Order.id.desc())
        )
        rows = (await self.db.execute(stmt)).all()
        lines = await self._lines_by_order([order.id for order, _ in rows])
        return [self._to_pending(order, user, lines.get(order.id, [])) for order, user in rows]
