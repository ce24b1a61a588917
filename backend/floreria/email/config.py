from typing import Optional

from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Configuration du module email.

    Les paramètres sont chargés depuis les variables d'environnement avec le préfixe EMAIL_
    (EMAIL_HOST, EMAIL_PORT, EMAIL_USER, EMAIL_PASS...).
    """
    HOST: str = ""
    PORT: int = 587
    USER: str = ""
    PASS: str = ""
    USE_TLS: bool = True
    FROM_NAME: Optional[str] = "Floristería"

    class Config:
        env_prefix = "EMAIL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instance globale des paramètres
settings = EmailSettings()
