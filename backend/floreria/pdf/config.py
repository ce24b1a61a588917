"""Configuration spécifique au module PDF.

Utilise Pydantic BaseSettings pour permettre la surcharge par
des variables d'environnement (préfixe PDF_).
"""
from pydantic_settings import BaseSettings


class PDFSettings(BaseSettings):
    """Paramètres de configuration pour la génération de PDF."""

    LOGO_PATH: str = "backend/static/logo.png"
    TMP_DIR: str = "temp"  # Comprobantes temporaires, supprimés après envoi
    EXPORT_DIR: str = "exports"  # Résumés conservés
    COMPANY_INFO_HTML: str = (
        "<b>Floristería</b><br/>"
        "Flores frescas de temporada<br/>"
        "Email : contacto@floristeria.com"
    )
    FOOTER_TEXT: str = "Floristería - Gracias por tu compra"
    PRIMARY_COLOR_HEX: str = "#b5446e"

    class Config:
        env_prefix = "PDF_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instance globale unique des paramètres (peut être utilisée directement ou injectée)
pdf_settings = PDFSettings()
