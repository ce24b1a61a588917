from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class AbstractEmailSender(ABC):
    """Interface abstraite pour un service d'envoi d'e-mails."""

    @abstractmethod
    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        sender_email: Optional[str] = None,
        attachments: Optional[List[Dict[str, Any]]] = None  # Ex: [{'filename': 'Comprobante-1.pdf', 'content': b'...'}]
    ) -> bool:
        """Envoie un email.

        Returns:
            True si l'envoi a réussi, False si le destinataire a été refusé.

        Raises:
            EmailSendingException: Si une erreur majeure empêche l'envoi.
            EmailConfigurationException: Si la configuration SMTP est incomplète.
        """
        raise NotImplementedError
