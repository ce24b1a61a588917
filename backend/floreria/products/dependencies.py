from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floreria.database import get_db_session
from floreria.products.interfaces.repositories import AbstractProductRepository
from floreria.products.repositories import SQLAlchemyProductRepository
from floreria.products.service import ProductService

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_product_repository(session: SessionDep) -> AbstractProductRepository:
    return SQLAlchemyProductRepository(db=session)

ProductRepositoryDep = Annotated[AbstractProductRepository, Depends(get_product_repository)]


def get_product_service(product_repo: ProductRepositoryDep) -> ProductService:
    return ProductService(product_repo=product_repo)

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
