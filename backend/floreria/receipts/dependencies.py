from typing import Annotated

from fastapi import Depends

from floreria.deliveries.dependencies import DeliveryRepositoryDep
from floreria.email.dependencies import EmailServiceDep
from floreria.orders.dependencies import OrderRepositoryDep
from floreria.pdf.dependencies import PDFGeneratorDep, PDFSettingsDep
from floreria.receipts.service import ReceiptService


def get_receipt_service(
    order_repository: OrderRepositoryDep,
    delivery_repository: DeliveryRepositoryDep,
    pdf_generator: PDFGeneratorDep,
    email_service: EmailServiceDep,
    pdf_settings: PDFSettingsDep,
) -> ReceiptService:
    return ReceiptService(
        order_repository=order_repository,
        delivery_repository=delivery_repository,
        pdf_generator=pdf_generator,
        email_service=email_service,
        pdf_settings=pdf_settings,
    )

ReceiptServiceDep = Annotated[ReceiptService, Depends(get_receipt_service)]
