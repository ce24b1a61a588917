import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Path, Query, status

from floreria.config import settings
from floreria.products.dependencies import ProductServiceDep
from floreria.products.exceptions import MissingSearchQueryException, ProductNotFoundException
from floreria.products.models import ProductRead

logger = logging.getLogger(__name__)

product_router = APIRouter(
    prefix="/productos",
    tags=["Productos"]
)


@product_router.get("", response_model=List[ProductRead], summary="Lister les produits avec filtres multiples")
async def list_products(
    service: ProductServiceDep,
    temporada_flor: Optional[List[str]] = Query(None),
    origen: Optional[List[str]] = Query(None),
):
    try:
        return await service.list_products(temporada_flor=temporada_flor, origen=origen)
    except Exception:
        logger.exception("[Products API] Erreur lors de la liste des produits")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error al obtener productos")


@product_router.get("/buscar", response_model=List[ProductRead], summary="Rechercher par nom, saison, origine ou pays")
async def search_products(
    service: ProductServiceDep,
    q: Optional[str] = Query(None),
):
    try:
        return await service.search_products(q)
    except MissingSearchQueryException as e:
        logger.warning("[Products API] Recherche sans paramètre q")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception:
        logger.exception(f"[Products API] Erreur lors de la recherche '{q}'")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error al buscar productos")


@product_router.get("/{product_id}", response_model=ProductRead, summary="Récupérer un produit par ID")
async def get_product(
    service: ProductServiceDep,
    product_id: int = Path(...),
):
    try:
        return await service.get_product(product_id)
    except ProductNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception:
        logger.exception(f"[Products API] Erreur lecture produit {product_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=settings.INTERNAL_ERROR_MSG)
