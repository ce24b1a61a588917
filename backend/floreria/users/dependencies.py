from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.database import get_db_session
from floreria.users.repositories import SQLAlchemyUserRepository


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> SQLAlchemyUserRepository:
    """Fournit une instance du repository utilisateurs."""
    return SQLAlchemyUserRepository(session)


UserRepositoryDep = Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)]
