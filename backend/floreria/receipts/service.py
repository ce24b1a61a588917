import logging
import time
from datetime import date, datetime, time as dt_time, timedelta, timezone
from typing import Optional

from pydantic import BaseModel

from floreria.deliveries.repositories import SQLAlchemyDeliveryRepository
from floreria.email.services import EmailService
from floreria.orders.interfaces.repositories import AbstractOrderRepository
from floreria.pdf.config import PDFSettings
from floreria.pdf.generator import AbstractPDFGenerator
from floreria.pdf.utils import write_pdf
from floreria.receipts.exceptions import (
    NoOrdersInRangeException,
    ReceiptNotFoundException,
    SummaryEmailFailedException,
)

logger = logging.getLogger(__name__)


class ExportResult(BaseModel):
    success: bool = True
    message: str
    file: str


class ReceiptService:
    """Comprobante individuel et export des commandes livrées par période."""

    def __init__(
        self,
        order_repository: AbstractOrderRepository,
        delivery_repository: SQLAlchemyDeliveryRepository,
        pdf_generator: AbstractPDFGenerator,
        email_service: EmailService,
        pdf_settings: PDFSettings,
    ):
        self.order_repository = order_repository
        self.delivery_repository = delivery_repository
        self.pdf_generator = pdf_generator
        self.email_service = email_service
        self.pdf_settings = pdf_settings

    async def render_single_receipt(self, order_id: int) -> bytes:
        """PDF du comprobante, depuis l'archive ou à défaut la commande encore en attente."""
        archive = await self.delivery_repository.get_by_order_id(order_id)
        if archive is not None:
            receipt = archive.to_receipt()
        else:
            pending = await self.order_repository.get_pending(order_id)
            if pending is None:
                logger.warning(f"[ReceiptService] Aucun comprobante pour la commande {order_id}.")
                raise ReceiptNotFoundException(order_id)
            receipt = pending.to_receipt()
        return await self.pdf_generator.generate_receipt_pdf(receipt)

    async def export_range(
        self,
        desde: Optional[date] = None,
        hasta: Optional[date] = None,
        email: Optional[str] = None,
    ) -> ExportResult:
        """Génère le résumé des commandes livrées entre ``desde`` et ``hasta`` inclus.

        Le fichier est conservé dans le dossier d'export, puis envoyé
        à ``email`` si fourni.
        """
        start = datetime.combine(desde, dt_time.min, tzinfo=timezone.utc) if desde else None
        end = datetime.combine(hasta + timedelta(days=1), dt_time.min, tzinfo=timezone.utc) if hasta else None
        delivered = await self.delivery_repository.list_between(start, end)
        if not delivered:
            logger.info(f"[ReceiptService] Aucune commande livrée entre {desde} et {hasta}.")
            raise NoOrdersInRangeException()

        pdf_bytes = await self.pdf_generator.generate_summary_pdf([d.to_receipt() for d in delivered])
        filename = f"Resumen_Pedidos_{int(time.time() * 1000)}.pdf"
        pdf_path = write_pdf(self.pdf_settings.EXPORT_DIR, filename, pdf_bytes)
        logger.info(f"[ReceiptService] Résumé de {len(delivered)} commande(s) enregistré: {pdf_path}")

        if not email:
            return ExportResult(message="PDF generado y guardado", file=filename)

        sent = await self.email_service.send_summary_email(
            recipient_email=email,
            pdf_path=pdf_path,
            order_count=len(delivered),
            date_from=desde,
            date_to=hasta,
        )
        if not sent:
            raise SummaryEmailFailedException(filename)
        return ExportResult(message="PDF enviado por correo y guardado", file=filename)
