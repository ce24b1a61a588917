"""
Routes d'administration : catalogue, commandes en attente, livraisons
et comprobantes PDF. Toutes exigent un token d'administrateur.
"""
import io
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import EmailStr

from floreria.auth.dependencies import get_current_admin_user
from floreria.config import settings
from floreria.deliveries.dependencies import DeliveryServiceDep
from floreria.deliveries.exceptions import (
    DeliveredOrderNotFoundException,
    DeliveryFailedException,
    PendingOrderNotFoundException,
    ReceiptEmailFailedException,
)
from floreria.deliveries.models import DeliveredOrderRead, DeliveryResponse
from floreria.orders.dependencies import OrderServiceDep
from floreria.orders.models import PendingOrderRead
from floreria.products.dependencies import ProductServiceDep
from floreria.products.exceptions import InvalidProductDataException, ProductNotFoundException
from floreria.products.models import (
    ProductCreatedResponse, ProductPayload, ProductRead, ProductUpdatedResponse,
)
from floreria.receipts.dependencies import ReceiptServiceDep
from floreria.receipts.exceptions import (
    NoOrdersInRangeException,
    ReceiptNotFoundException,
    SummaryEmailFailedException,
)
from floreria.receipts.service import ExportResult

logger = logging.getLogger(__name__)

admin_router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin_user)],
)


def internal_error(detail: str = settings.INTERNAL_ERROR_MSG) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# --- Produits ---

@admin_router.get("/productos", response_model=List[ProductRead], summary="Lister tous les produits (admin)")
async def list_admin_products(service: ProductServiceDep):
    try:
        return await service.list_admin_products()
    except Exception:
        logger.exception("[Admin API] Erreur lors de la liste des produits")
        raise internal_error("Error al obtener productos")


@admin_router.post(
    "/productos",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un produit",
)
async def create_product(payload: ProductPayload, service: ProductServiceDep):
    try:
        product = await service.create_product(payload)
        return ProductCreatedResponse(id=product.id)
    except InvalidProductDataException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception:
        logger.exception("[Admin API] Erreur lors de la création du produit")
        raise internal_error("Error al guardar el producto")


@admin_router.put("/productos/{product_id}", response_model=ProductUpdatedResponse, summary="Modifier un produit")
async def update_product(
    payload: ProductPayload,
    service: ProductServiceDep,
    product_id: int = Path(...),
):
    try:
        product = await service.update_product(product_id, payload)
        return ProductUpdatedResponse(producto=ProductRead.model_validate(product))
    except InvalidProductDataException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ProductNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception:
        logger.exception(f"[Admin API] Erreur lors de la mise à jour du produit {product_id}")
        raise internal_error("Error al actualizar producto")


@admin_router.delete("/productos/{product_id}", summary="Supprimer un produit")
async def delete_product(service: ProductServiceDep, product_id: int = Path(...)):
    try:
        await service.delete_product(product_id)
        return {"success": True}
    except ProductNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception:
        logger.exception(f"[Admin API] Erreur lors de la suppression du produit {product_id}")
        raise internal_error("Error al eliminar producto")


# --- Commandes et livraisons ---

@admin_router.get("/ordenes", response_model=List[PendingOrderRead], summary="Commandes en attente")
async def list_pending_orders(service: OrderServiceDep):
    try:
        return await service.list_pending_orders()
    except Exception:
        logger.exception("[Admin API] Erreur lors de la liste des commandes en attente")
        raise internal_error("Error al obtener pedidos")


@admin_router.post("/ordenes/entregar/{order_id}", response_model=DeliveryResponse, summary="Marquer une commande livrée")
async def deliver_order(service: DeliveryServiceDep, order_id: int = Path(...)):
    try:
        await service.mark_delivered(order_id)
        return DeliveryResponse()
    except PendingOrderNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ReceiptEmailFailedException as e:
        # Livraison enregistrée : réponse distincte, pas de rollback
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": e.message, "entregado": True, "orden_id": e.order_id},
        )
    except DeliveryFailedException as e:
        logger.error(f"[Admin API] Livraison de la commande {order_id} annulée: {e.__cause__}")
        raise internal_error(e.message)
    except Exception:
        logger.exception(f"[Admin API] Erreur inattendue lors de la livraison {order_id}")
        raise internal_error("Error al entregar pedido")


@admin_router.get("/ordenes/entregadas", response_model=List[DeliveredOrderRead], summary="Commandes livrées")
async def list_delivered_orders(service: DeliveryServiceDep):
    try:
        return await service.list_delivered()
    except Exception:
        logger.exception("[Admin API] Erreur lors de la liste des commandes livrées")
        raise internal_error("Error al obtener entregados")


@admin_router.delete("/ordenes/entregadas/{delivered_id}", summary="Supprimer une archive de livraison")
async def delete_delivered_order(service: DeliveryServiceDep, delivered_id: int = Path(...)):
    try:
        await service.delete_delivered(delivered_id)
        return {"success": True}
    except DeliveredOrderNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception:
        logger.exception(f"[Admin API] Erreur lors de la suppression de l'archive {delivered_id}")
        raise internal_error("Error al eliminar entrega")


# --- Comprobantes PDF ---

@admin_router.get("/comprobante/{order_id}", summary="Télécharger le comprobante PDF d'une commande")
async def download_receipt(service: ReceiptServiceDep, order_id: int = Path(...)):
    try:
        pdf_bytes = await service.render_single_receipt(order_id)
    except ReceiptNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception:
        logger.exception(f"[Admin API] Erreur génération comprobante {order_id}")
        raise internal_error()
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="Comprobante-{order_id}.pdf"'},
    )


@admin_router.get("/ordenes/exportar-pdf", response_model=ExportResult, summary="Exporter les commandes livrées en PDF")
async def export_delivered_pdf(
    service: ReceiptServiceDep,
    desde: Optional[date] = Query(None),
    hasta: Optional[date] = Query(None),
    email: Optional[EmailStr] = Query(None),
):
    try:
        return await service.export_range(desde=desde, hasta=hasta, email=email)
    except NoOrdersInRangeException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except SummaryEmailFailedException as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": e.message, "file": e.filename},
        )
    except Exception:
        logger.exception("[Admin API] Erreur lors de l'export PDF")
        raise internal_error("Error al generar o enviar PDF")
