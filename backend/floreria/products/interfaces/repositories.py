from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from floreria.products.models import Product


class AbstractProductRepository(ABC):
    """Interface abstraite pour le repository des produits."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        raise NotImplementedError

    @abstractmethod
    async def list(
        self,
        temporadas: Optional[List[str]] = None,
        origenes: Optional[List[str]] = None,
    ) -> List[Product]:
        """Filtres multi-valeurs : OU à l'intérieur d'un filtre, ET entre filtres."""
        raise NotImplementedError

    @abstractmethod
    async def search(self, term: str) -> List[Product]:
        raise NotImplementedError

    @abstractmethod
    async def list_for_admin(self) -> List[Product]:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, product_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Product:
        raise NotImplementedError

    @abstractmethod
    async def update(self, product_id: int, data: Dict[str, Any]) -> Product:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, product_id: int) -> None:
        raise NotImplementedError
