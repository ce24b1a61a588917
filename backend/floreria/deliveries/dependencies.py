from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.database import get_db_session
from floreria.deliveries.repositories import SQLAlchemyDeliveryRepository
from floreria.deliveries.service import DeliveryService
from floreria.email.dependencies import EmailServiceDep
from floreria.orders.dependencies import OrderRepositoryDep
from floreria.pdf.dependencies import PDFGeneratorDep, PDFSettingsDep


def get_delivery_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> SQLAlchemyDeliveryRepository:
    return SQLAlchemyDeliveryRepository(db_session=session)

DeliveryRepositoryDep = Annotated[SQLAlchemyDeliveryRepository, Depends(get_delivery_repository)]


def get_delivery_service(
    order_repository: OrderRepositoryDep,
    delivery_repository: DeliveryRepositoryDep,
    pdf_generator: PDFGeneratorDep,
    email_service: EmailServiceDep,
    pdf_settings: PDFSettingsDep,
) -> DeliveryService:
    return DeliveryService(
        order_repository=order_repository,
        delivery_repository=delivery_repository,
        pdf_generator=pdf_generator,
        email_service=email_service,
        pdf_settings=pdf_settings,
    )

DeliveryServiceDep = Annotated[DeliveryService, Depends(get_delivery_service)]
