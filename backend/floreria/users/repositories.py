import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from floreria.users.models import User

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository:
    """Accès en lecture seule à la table des utilisateurs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        logger.debug(f"[UserRepository] Lecture utilisateur ID: {user_id}")
        return await self.db.get(User, user_id)

    async def get_by_affiliate_code(self, code: str) -> Optional[User]:
        logger.debug(f"[UserRepository] Recherche affilié avec code: {code}")
        stmt = select(User).where(User.codigo_afiliado == code).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first()
