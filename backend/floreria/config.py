import logging
from decimal import Decimal
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()

DEFAULT_JWT_SECRET = "remplacer_par_une_vraie_cle_secrete_forte"


class Settings(BaseSettings):
    # --- Serveur ---
    PORT: int = 3000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["https://tu-sitio.netlify.app"]
    LOG_LEVEL: str = "INFO"

    # --- Base de Données ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "floreria"
    DB_ECHO_LOG: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # --- JWT ---
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- Référents ---
    # Commission versée à l'affilié, en fraction du sous-total de chaque ligne
    REFERRAL_COMMISSION_RATE: Decimal = Decimal("0.02")

    # --- Messages Génériques (exposés au client) ---
    INTERNAL_ERROR_MSG: str = "Error interno del servidor"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignorer les variables d'env non définies dans le modèle

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@"
            f"{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()

if settings.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
    logger.warning("La variable JWT_SECRET_KEY utilise la valeur par défaut. Veuillez définir une clé secrète forte.")
if not settings.DB_PASSWORD:
    logger.warning("La variable d'environnement DB_PASSWORD n'est pas définie.")

logger.info(f"Configuration chargée: DB={settings.DB_NAME}@{settings.DB_HOST}:{settings.DB_PORT}, CORS={settings.CORS_ORIGINS}")
