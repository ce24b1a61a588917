import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from floreria.config import settings

logger = logging.getLogger(__name__)

# Pool de connexions unique pour le processus.
# Créé à l'import (aucune connexion n'est ouverte ici), vérifié au démarrage
# de l'application et libéré à l'arrêt via dispose_engine().
engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO_LOG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Empêche les objets d'expirer après commit
)

logger.info(f"Moteur et Session Factory SQLAlchemy Async configurés pour {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}.")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides an async database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            # Pas de commit ici: les services contrôlent leurs transactions.
        except Exception as e:
            logger.error(f"Erreur durant la session DB, rollback: {e}", exc_info=True)
            await session.rollback()
            raise
        finally:
            await session.close()
            logger.debug("Session DB fermée.")


async def check_connection() -> bool:
    """Ouvre une connexion du pool pour vérifier que PostgreSQL répond."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Connexion à PostgreSQL réussie.")
        return True
    except Exception as e:
        logger.error(f"Erreur de connexion à PostgreSQL: {e}", exc_info=True)
        return False


async def dispose_engine() -> None:
    await engine.dispose()
    logger.info("Pool de connexions PostgreSQL fermé.")
