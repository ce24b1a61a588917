import logging
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def write_pdf(directory: str, filename: str, content: bytes) -> Path:
    """Écrit le PDF dans `directory` (créé au besoin) et renvoie son chemin."""
    os.makedirs(directory, exist_ok=True)
    path = Path(directory) / filename
    path.write_bytes(content)
    logger.info(f"[PDFUtils] PDF écrit: {path} ({len(content)} bytes)")
    return path


@contextmanager
def temporary_pdf(directory: str, filename: str, content: bytes) -> Iterator[Path]:
    """Fichier PDF temporaire, supprimé à la sortie du bloc quelle qu'en soit l'issue.

    Un préfixe aléatoire évite les collisions entre deux requêtes
    traitant la même commande.
    """
    path = write_pdf(directory, f"{uuid.uuid4().hex[:8]}-{filename}", content)
    try:
        yield path
    finally:
        try:
            path.unlink()
            logger.debug(f"[PDFUtils] PDF temporaire supprimé: {path}")
        except FileNotFoundError:
            logger.warning(f"[PDFUtils] PDF temporaire déjà absent: {path}")
