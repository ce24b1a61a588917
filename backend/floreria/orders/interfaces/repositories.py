from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple

from floreria.orders.models import CartItem, Order, PendingOrder


class AbstractOrderRepository(ABC):
    """Interface abstraite pour le repository des commandes.

    Les méthodes d'écriture n'engagent pas la transaction : l'appelant
    termine par commit() ou rollback().
    """

    @abstractmethod
    async def add_order(self, usuario_id: int, total: Decimal) -> Order:
        """Insère la commande et renvoie l'instance avec son ID (flush)."""
        raise NotImplementedError

    @abstractmethod
    async def add_line_items(self, orden_id: int, items: List[CartItem]) -> None:
        raise NotImplementedError

    @abstractmethod
    async def add_referrals(self, afiliado_id: int, commissions: List[Tuple[int, Decimal]]) -> None:
        """Une ligne par (producto_id, monto)."""
        raise NotImplementedError

    @abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_pending(self, order_id: int) -> Optional[PendingOrder]:
        raise NotImplementedError

    @abstractmethod
    async def list_pending(self) -> List[PendingOrder]:
        """Commandes en attente, les plus récentes d'abord."""
        raise NotImplementedError
