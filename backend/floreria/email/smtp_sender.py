import asyncio
import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, List, Optional

from floreria.email.config import EmailSettings, settings
from floreria.email.exceptions import EmailConfigurationException, EmailSendingException
from floreria.email.sender import AbstractEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(AbstractEmailSender):
    """Implémentation de l'envoi d'email via SMTP standard."""

    def __init__(self, email_settings: Optional[EmailSettings] = None):
        config = email_settings or settings
        self.smtp_host = config.HOST
        self.smtp_port = config.PORT
        self.smtp_user = config.USER
        self.smtp_password = config.PASS
        self.default_sender = config.USER
        self.from_name = config.FROM_NAME
        self.use_tls = config.USE_TLS
        logger.debug(f"[SmtpEmailSender] Initialisé pour {self.smtp_host}:{self.smtp_port}")

    def is_configured(self) -> bool:
        return all([self.smtp_host, self.smtp_port, self.smtp_user, self.smtp_password])

    def _build_message(
        self,
        sender: str,
        recipient_email: str,
        subject: str,
        html_content: str,
        attachments: Optional[List[Dict[str, Any]]],
    ) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["From"] = f"{self.from_name} <{sender}>" if self.from_name else sender
        msg["To"] = recipient_email
        msg["Subject"] = subject
        msg.attach(MIMEText(html_content, "html", "utf-8"))

        for attachment in attachments or []:
            filename = attachment.get("filename")
            content = attachment.get("content")
            subtype = attachment.get("subtype", "octet-stream")
            if not filename or not content:
                logger.warning(f"[SmtpEmailSender] Pièce jointe ignorée (manque filename ou content): {filename}")
                continue
            part = MIMEApplication(content, _subtype=subtype)
            part.add_header("Content-Disposition", "attachment", filename=filename)
            msg.attach(part)
            logger.debug(f"[SmtpEmailSender] Pièce jointe '{filename}' ajoutée.")
        return msg

    def _deliver(self, sender: str, recipient_email: str, msg: MIMEMultipart) -> None:
        logger.debug(f"[SmtpEmailSender] Connexion à {self.smtp_host}:{self.smtp_port}")
        server = smtplib.SMTP(self.smtp_host, self.smtp_port)
        try:
            if self.use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.sendmail(sender, [recipient_email], msg.as_string())
        finally:
            server.quit()

    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        sender_email: Optional[str] = None,
        attachments: Optional[List[Dict[str, Any]]] = None
    ) -> bool:
        if not self.is_configured():
            logger.error("[SmtpEmailSender] Configuration SMTP incomplète.")
            raise EmailConfigurationException("Configuration SMTP (host, port, user, password) incomplète.")

        final_sender = sender_email or self.default_sender
        msg = self._build_message(final_sender, recipient_email, subject, html_content, attachments)

        try:
            logger.info(f"[SmtpEmailSender] Envoi de l'email à {recipient_email} (Sujet: {subject})")
            # smtplib est bloquant: l'envoi tourne dans un thread pour libérer la boucle
            await asyncio.to_thread(self._deliver, final_sender, recipient_email, msg)
            logger.info(f"[SmtpEmailSender] Email envoyé avec succès à {recipient_email}")
            return True
        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"[SmtpEmailSender] Destinataire refusé: {recipient_email}. Détails: {e.recipients}")
            return False
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[SmtpEmailSender] Échec authentification SMTP: {e}", exc_info=True)
            raise EmailSendingException("Échec authentification SMTP.", original_exception=e)
        except smtplib.SMTPException as e:
            logger.error(f"[SmtpEmailSender] Erreur SMTP lors de l'envoi à {recipient_email}: {e}", exc_info=True)
            raise EmailSendingException(f"Erreur SMTP: {e}", original_exception=e)
        except OSError as e:
            logger.error(f"[SmtpEmailSender] Serveur SMTP injoignable ({self.smtp_host}:{self.smtp_port}): {e}", exc_info=True)
            raise EmailSendingException(f"Serveur SMTP injoignable: {e}", original_exception=e)
