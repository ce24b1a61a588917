import logging

from fastapi import APIRouter, HTTPException, status

from floreria.config import settings
from floreria.orders.dependencies import OrderServiceDep
from floreria.orders.exceptions import (
    InvalidOrderDataException,
    OrderCreationFailedException,
    OrderUserNotFoundException,
)
from floreria.orders.models import OrderCreate, OrderCreatedResponse

logger = logging.getLogger(__name__)

order_router = APIRouter(
    prefix="/ordenes",
    tags=["Ordenes"]
)


@order_router.post("", response_model=OrderCreatedResponse, summary="Créer une commande (et ses commissions d'affilié)")
async def create_order(order_in: OrderCreate, service: OrderServiceDep):
    try:
        order_id = await service.place_order(order_in)
        return OrderCreatedResponse(orden_id=order_id)
    except InvalidOrderDataException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except OrderUserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except OrderCreationFailedException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    except Exception:
        logger.exception("[Orders API] Erreur inattendue lors de la création de commande")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=settings.INTERNAL_ERROR_MSG)
