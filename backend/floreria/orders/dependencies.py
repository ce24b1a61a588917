from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.config import settings
from floreria.database import get_db_session
from floreria.email.dependencies import EmailServiceDep
from floreria.orders.interfaces.repositories import AbstractOrderRepository
from floreria.orders.repositories import SQLAlchemyOrderRepository
from floreria.orders.service import OrderService
from floreria.users.dependencies import UserRepositoryDep

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_order_repository(session: SessionDep) -> AbstractOrderRepository:
    return SQLAlchemyOrderRepository(db_session=session)

OrderRepositoryDep = Annotated[AbstractOrderRepository, Depends(get_order_repository)]


def get_order_service(
    order_repository: OrderRepositoryDep,
    user_repository: UserRepositoryDep,
    email_service: EmailServiceDep,
) -> OrderService:
    """Injecte les repositories et le service email dans OrderService."""
    return OrderService(
        order_repository=order_repository,
        user_repository=user_repository,
        email_service=email_service,
        commission_rate=settings.REFERRAL_COMMISSION_RATE,
    )

OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
