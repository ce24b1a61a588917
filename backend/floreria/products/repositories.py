import logging
from typing import Any, Dict, List, Optional

from fastcrud import FastCRUD
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.products.interfaces.repositories import AbstractProductRepository
from floreria.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyProductRepository(AbstractProductRepository):
    """Implémentation SQLAlchemy du repository des produits."""

    def __init__(self, db: AsyncSession):
        self.db = db
        # FastCRUD pour les primitives admin (existence, mise à jour)
        self.crud = FastCRUD(Product)

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        logger.debug(f"[ProductRepository] Lecture produit ID: {product_id}")
        return await self.db.get(Product, product_id)

    async def list(
        self,
        temporadas: Optional[List[str]] = None,
        origenes: Optional[List[str]] = None,
    ) -> List[Product]:
        logger.debug(f"[ProductRepository] Liste produits: temporada_flor={temporadas}, origen={origenes}")
        stmt = select(Product)
        if temporadas:
            stmt = stmt.where(Product.temporada_flor.in_(temporadas))
        if origenes:
            stmt = stmt.where(Product.origen.in_(origenes))
        result = await self.db.execute(stmt.order_by(Product.id))
        return list(result.scalars().all())

    async def search(self, term: str) -> List[Product]:
        pattern = f"%{term.lower()}%"
        logger.debug(f"[ProductRepository] Recherche produits: {pattern}")
        stmt = select(Product).where(
            or_(
                Product.nombre.ilike(pattern),
                Product.temporada_flor.ilike(pattern),
                Product.origen.ilike(pattern),
                Product.pais.ilike(pattern),
            )
        ).order_by(Product.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_admin(self) -> List[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id.desc()))
        return list(result.scalars().all())

    async def exists(self, product_id: int) -> bool:
        return await self.crud.exists(db=self.db, id=product_id)

    async def create(self, data: Dict[str, Any]) -> Product:
        product = Product(**data)
        self.db.add(product)
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"[ProductRepository] Erreur création produit '{data.get('nombre')}': {e}", exc_info=True)
            raise
        await self.db.refresh(product)
        logger.info(f"[ProductRepository] Produit '{product.nombre}' créé avec ID: {product.id}")
        return product

    async def update(self, product_id: int, data: Dict[str, Any]) -> Product:
        await self.crud.update(db=self.db, object=data, id=product_id)
        logger.info(f"[ProductRepository] Produit ID {product_id} mis à jour.")
        # Relire la ligne : l'instance éventuellement en cache est périmée
        return await self.db.get(Product, product_id, populate_existing=True)

    async def delete(self, product_id: int) -> None:
        # Suppression via l'ORM : l'instance quitte aussi la session
        product = await self.db.get(Product, product_id)
        await self.db.delete(product)
        await self.db.commit()
        logger.info(f"[ProductRepository] Produit ID {product_id} supprimé.")
