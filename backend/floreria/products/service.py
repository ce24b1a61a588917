import logging
from typing import List, Optional

from floreria.products.exceptions import (
    InvalidProductDataException,
    MissingSearchQueryException,
    ProductNotFoundException,
)
from floreria.products.interfaces.repositories import AbstractProductRepository
from floreria.products.models import Product, ProductPayload

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("nombre", "precio", "temporada_flor", "origen", "pais")


class ProductService:
    """Catalogue public et opérations d'administration des produits."""

    def __init__(self, product_repo: AbstractProductRepository):
        self.product_repo = product_repo

    # --- Catalogue public ---

    async def list_products(
        self,
        temporada_flor: Optional[List[str]] = None,
        origen: Optional[List[str]] = None,
    ) -> List[Product]:
        # Les valeurs vides (?origen=) ne restreignent rien
        temporadas = [t for t in (temporada_flor or []) if t]
        origenes = [o for o in (origen or []) if o]
        return await self.product_repo.list(temporadas=temporadas, origenes=origenes)

    async def search_products(self, q: Optional[str]) -> List[Product]:
        if not q:
            raise MissingSearchQueryException()
        return await self.product_repo.search(q)

    async def get_product(self, product_id: int) -> Product:
        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    # --- Administration ---

    @staticmethod
    def _validated(payload: ProductPayload) -> dict:
        data = payload.model_dump()
        missing = [
            name for name in REQUIRED_FIELDS
            if data.get(name) is None or (isinstance(data[name], str) and not data[name].strip())
        ]
        if missing or data["precio"] <= 0:
            logger.warning(f"[ProductService] Données produit incomplètes: {missing or ['precio']}")
            raise InvalidProductDataException()
        return data

    async def list_admin_products(self) -> List[Product]:
        return await self.product_repo.list_for_admin()

    async def create_product(self, payload: ProductPayload) -> Product:
        data = self._validated(payload)
        product = await self.product_repo.create(data)
        logger.info(f"[ProductService] Produit créé: ID {product.id}")
        return product

    async def update_product(self, product_id: int, payload: ProductPayload) -> Product:
        data = self._validated(payload)
        if not await self.product_repo.exists(product_id):
            raise ProductNotFoundException(product_id)
        product = await self.product_repo.update(product_id, data)
        logger.info(f"[ProductService] Produit mis à jour: ID {product_id}")
        return product

    async def delete_product(self, product_id: int) -> None:
        if not await self.product_repo.exists(product_id):
            raise ProductNotFoundException(product_id)
        await self.product_repo.delete(product_id)
        logger.info(f"[ProductService] Produit supprimé: ID {product_id}")
