import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

import jinja2

from floreria.email.exceptions import EmailDomainException
from floreria.email.sender import AbstractEmailSender

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(["html", "xml"]),
)


class EmailService:
    """Service applicatif pour l'envoi d'emails métier."""

    def __init__(self, email_sender: AbstractEmailSender):
        self.email_sender = email_sender

    def _render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Charge et rend un template Jinja2."""
        template = env.get_template(template_name)
        return template.render(context)

    async def _send(
        self,
        recipient_email: str,
        subject: str,
        template_name: str,
        context: Dict[str, Any],
        attachments: Optional[List[Dict[str, Any]]] = None,
    ) -> bool:
        html_content = self._render_template(template_name, context)
        try:
            success = await self.email_sender.send_email(
                recipient_email=recipient_email,
                subject=subject,
                html_content=html_content,
                attachments=attachments or [],
            )
        except EmailDomainException as e:
            logger.error(f"[EmailService] Erreur lors de l'envoi '{subject}' à {recipient_email}: {e}")
            return False

        if success:
            logger.info(f"[EmailService] Email '{subject}' envoyé à {recipient_email}")
        else:
            logger.warning(f"[EmailService] L'envoi de '{subject}' a échoué (retour sender: False) pour {recipient_email}")
        return success

    async def send_order_confirmation_email(
        self,
        recipient_email: str,
        customer_name: str,
        order_id: int,
        total: Decimal,
        items: List[Dict[str, Any]],
    ) -> bool:
        """Envoie l'email de confirmation juste après l'enregistrement de la commande."""
        subject = f"Confirmación de pedido #{order_id}"
        context = {
            "customer_name": customer_name,
            "order_id": order_id,
            "total": f"{total:.2f}",
            "items": items,
        }
        return await self._send(recipient_email, subject, "order_confirmation_email.html", context)

    async def send_receipt_email(
        self,
        recipient_email: str,
        customer_name: str,
        order_id: int,
        pdf_path: Path,
    ) -> bool:
        """Envoie le comprobante PDF (fichier temporaire) au client après la livraison."""
        subject = f"Comprobante de Pedido #{order_id}"
        context = {"customer_name": customer_name, "order_id": order_id}
        attachments = [{
            "filename": f"Comprobante-{order_id}.pdf",
            "content": pdf_path.read_bytes(),
            "subtype": "pdf",
        }]
        return await self._send(recipient_email, subject, "receipt_email.html", context, attachments)

    async def send_summary_email(
        self,
        recipient_email: str,
        pdf_path: Path,
        order_count: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> bool:
        """Envoie le résumé PDF des commandes livrées à un administrateur."""
        subject = "Resumen de pedidos entregados"
        context = {
            "order_count": order_count,
            "date_from": date_from.strftime("%d/%m/%Y") if date_from else None,
            "date_to": date_to.strftime("%d/%m/%Y") if date_to else None,
        }
        attachments = [{
            "filename": pdf_path.name,
            "content": pdf_path.read_bytes(),
            "subtype": "pdf",
        }]
        return await self._send(recipient_email, subject, "summary_email.html", context, attachments)
