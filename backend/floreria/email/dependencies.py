from typing import Annotated

from fastapi import Depends

from floreria.email.sender import AbstractEmailSender
from floreria.email.services import EmailService
from floreria.email.smtp_sender import SmtpEmailSender


def get_email_sender() -> AbstractEmailSender:
    """Fournit l'implémentation concrète de l'Email Sender (SMTP, configurée par EMAIL_*)."""
    return SmtpEmailSender()


EmailSenderDep = Annotated[AbstractEmailSender, Depends(get_email_sender)]


def get_email_service(email_sender: EmailSenderDep) -> EmailService:
    """Fournit une instance du service d'envoi d'emails."""
    return EmailService(email_sender=email_sender)


EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
