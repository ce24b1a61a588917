from abc import ABC, abstractmethod
from typing import List

from floreria.pdf.models import ReceiptData


class AbstractPDFGenerator(ABC):
    """Interface abstraite pour un générateur de documents PDF.
    Approche orientée données, l'implémentation gère la mise en page.
    """

    @abstractmethod
    async def generate_receipt_pdf(self, receipt: ReceiptData) -> bytes:
        """Génère le comprobante d'une commande.

        Raises:
            PDFGenerationException: Si une erreur survient durant la génération.
        """
        raise NotImplementedError

    @abstractmethod
    async def generate_summary_pdf(self, receipts: List[ReceiptData]) -> bytes:
        """Génère un résumé de plusieurs commandes livrées dans un seul document.

        Raises:
            PDFGenerationException: Si une erreur survient durant la génération.
        """
        raise NotImplementedError
