import logging
from typing import List

from floreria.deliveries.exceptions import (
    DeliveredOrderNotFoundException,
    DeliveryFailedException,
    PendingOrderNotFoundException,
    ReceiptEmailFailedException,
)
from floreria.deliveries.models import DeliveredOrder
from floreria.deliveries.repositories import SQLAlchemyDeliveryRepository
from floreria.email.services import EmailService
from floreria.orders.interfaces.repositories import AbstractOrderRepository
from floreria.pdf.config import PDFSettings
from floreria.pdf.generator import AbstractPDFGenerator
from floreria.pdf.utils import temporary_pdf

logger = logging.getLogger(__name__)


class DeliveryService:
    """Passage d'une commande de l'état en attente à l'état livré.

    L'archivage est transactionnel. Le comprobante est généré et envoyé
    après le commit : un échec à ce stade ne revient pas sur la livraison.
    """

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

    async def mark_delivered(self, order_id: int) -> DeliveredOrder:
        """Archive la commande puis envoie le comprobante PDF au client.

        Raises:
            PendingOrderNotFoundException: Aucune commande en attente avec cet ID.
            DeliveryFailedException: L'archivage a échoué (rollback, rien n'a changé).
            ReceiptEmailFailedException: Commande archivée, comprobante non envoyé.
        """
        pending = await self.order_repository.get_pending(order_id)
        if pending is None:
            logger.warning(f"[DeliveryService] Commande en attente ID {order_id} introuvable.")
            raise PendingOrderNotFoundException(order_id)

        try:
            archive = await self.delivery_repository.archive_and_delete(pending)
        except Exception as e:
            raise DeliveryFailedException(order_id) from e
        if archive is None:
            raise PendingOrderNotFoundException(order_id)
        logger.info(f"[DeliveryService] Commande {order_id} marquée livrée.")

        sent = False
        try:
            pdf_bytes = await self.pdf_generator.generate_receipt_pdf(pending.to_receipt())
            with temporary_pdf(self.pdf_settings.TMP_DIR, f"Comprobante-{order_id}.pdf", pdf_bytes) as pdf_path:
                sent = await self.email_service.send_receipt_email(
                    recipient_email=pending.email,
                    customer_name=pending.cliente,
                    order_id=order_id,
                    pdf_path=pdf_path,
                )
        except Exception as e:
            logger.error(f"[DeliveryService] Erreur génération/envoi comprobante commande {order_id}: {e}", exc_info=True)

        if not sent:
            raise ReceiptEmailFailedException(order_id)
        return archive

    async def list_delivered(self) -> List[DeliveredOrder]:
        return await self.delivery_repository.list_all()

    async def delete_delivered(self, delivered_id: int) -> None:
        delivered = await self.delivery_repository.get_by_id(delivered_id)
        if delivered is None:
            raise DeliveredOrderNotFoundException(delivered_id)
        await self.delivery_repository.delete(delivered)
