import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

from floreria.email.dependencies import get_email_service
from floreria.email.exceptions import EmailSendingException
from floreria.email.services import EmailService


@pytest.fixture
def mock_email_sender():
    """Fixture pour un mock de l'email sender."""
    sender = AsyncMock()
    sender.send_email.return_value = True
    return sender


@pytest.fixture
def email_service(mock_email_sender):
    return EmailService(email_sender=mock_email_sender)


@pytest.mark.asyncio
async def test_send_order_confirmation_email(email_service, mock_email_sender):
    result = await email_service.send_order_confirmation_email(
        recipient_email="ana@example.com",
        customer_name="Ana",
        order_id=5,
        total=Decimal("40.00"),
        items=[{"id": 1, "nombre": "Rose Bouquet", "precio": Decimal("20.00"), "cantidad": 2}],
    )

    assert result is True
    call_args = mock_email_sender.send_email.call_args[1]
    assert call_args["recipient_email"] == "ana@example.com"
    assert call_args["subject"] == "Confirmación de pedido #5"
    assert "Hola Ana" in call_args["html_content"]
    assert "$20.00" in call_args["html_content"]
    assert call_args["attachments"] == []


@pytest.mark.asyncio
async def test_send_receipt_email_attaches_pdf(email_service, mock_email_sender, tmp_path):
    pdf_path = tmp_path / "abc-Comprobante-5.pdf"
    pdf_path.write_bytes(b"%PDF-1.4 test")

    result = await email_service.send_receipt_email("ana@example.com", "Ana García", 5, pdf_path)

    assert result is True
    call_args = mock_email_sender.send_email.call_args[1]
    assert call_args["subject"] == "Comprobante de Pedido #5"
    attachment = call_args["attachments"][0]
    assert attachment["filename"] == "Comprobante-5.pdf"
    assert attachment["content"] == b"%PDF-1.4 test"


@pytest.mark.asyncio
async def test_send_summary_email(email_service, mock_email_sender, tmp_path):
    pdf_path = tmp_path / "Resumen_Pedidos_1.pdf"
    pdf_path.write_bytes(b"%PDF-1.4")

    await email_service.send_summary_email(
        "jefe@example.com", pdf_path, order_count=3, date_from=date(2024, 3, 1), date_to=date(2024, 3, 31)
    )

    call_args = mock_email_sender.send_email.call_args[1]
    assert call_args["attachments"][0]["filename"] == "Resumen_Pedidos_1.pdf"
    assert "01/03/2024" in call_args["html_content"]
    assert "31/03/2024" in call_args["html_content"]


@pytest.mark.asyncio
async def test_sender_exception_is_reported_as_failure(email_service, mock_email_sender):
    mock_email_sender.send_email.side_effect = EmailSendingException("SMTP indisponible")

    result = await email_service.send_order_confirmation_email(
        "ana@example.com", "Ana", 5, Decimal("40.00"), items=[]
    )

    assert result is False


@pytest.mark.asyncio
async def test_refused_recipient_is_reported_as_failure(email_service, mock_email_sender):
    mock_email_sender.send_email.return_value = False
    result = await email_service.send_order_confirmation_email(
        "ana@example.com", "Ana", 5, Decimal("40.00"), items=[]
    )
    assert result is False


def test_get_email_service(mock_email_sender):
    service = get_email_service(email_sender=mock_email_sender)
    assert isinstance(service, EmailService)
    assert service.email_sender is mock_email_sender
