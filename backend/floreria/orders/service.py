import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from floreria.email.services import EmailService
from floreria.orders.exceptions import (
    InvalidOrderDataException,
    OrderCreationFailedException,
    OrderUserNotFoundException,
)
from floreria.orders.interfaces.repositories import AbstractOrderRepository
from floreria.orders.models import OrderCreate, PendingOrder
from floreria.users.repositories import SQLAlchemyUserRepository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderService:
    """Service applicatif pour l'enregistrement des commandes et leur suivi."""

    def __init__(
        self,
        order_repository: AbstractOrderRepository,
        user_repository: SQLAlchemyUserRepository,
        email_service: EmailService,
        commission_rate: Decimal,
    ):
        self.order_repository = order_repository
        self.user_repository = user_repository
        self.email_service = email_service
        self.commission_rate = commission_rate

    async def place_order(self, order_data: OrderCreate) -> int:
        """Enregistre la commande, ses lignes et les commissions d'affilié en une transaction.

        Les prix du panier sont repris tels que fournis par le client.
        L'email de confirmation part après le commit ; son échec est
        seulement journalisé.

        Returns:
            L'ID de la commande créée.

        Raises:
            InvalidOrderDataException: Utilisateur absent, panier vide ou quantité nulle.
            OrderUserNotFoundException: L'utilisateur n'existe pas.
            OrderCreationFailedException: Erreur pendant la transaction (rollback effectué).
        """
        if (
            not order_data.usuario_id
            or not order_data.carrito
            or any(item.cantidad < 1 for item in order_data.carrito)
        ):
            logger.warning("[OrderService] Commande refusée : utilisateur absent, panier vide ou quantité invalide.")
            raise InvalidOrderDataException()

        carrito = order_data.carrito
        total = sum((item.subtotal for item in carrito), Decimal(0))
        logger.info(f"[OrderService] Création commande pour user ID: {order_data.usuario_id}, {len(carrito)} article(s), total {total}")

        user = await self.user_repository.get_by_id(order_data.usuario_id)
        if user is None:
            logger.warning(f"[OrderService] Utilisateur ID {order_data.usuario_id} introuvable, commande refusée.")
            raise OrderUserNotFoundException(order_data.usuario_id)
        # Lu avant le commit pour ne pas dépendre de l'état de l'instance ensuite
        recipient_email, customer_name = user.email, user.nombre

        try:
            order = await self.order_repository.add_order(order_data.usuario_id, total)
            order_id = order.id
            await self.order_repository.add_line_items(order_id, carrito)

            if order_data.ref:
                affiliate = await self.user_repository.get_by_affiliate_code(order_data.ref)
                if affiliate is not None:
                    commissions = [
                        (item.id, (item.subtotal * self.commission_rate).quantize(CENT, rounding=ROUND_HALF_UP))
                        for item in carrito
                    ]
                    await self.order_repository.add_referrals(affiliate.id, commissions)
                    logger.info(f"[OrderService] {len(commissions)} commission(s) enregistrée(s) pour l'affilié ID {affiliate.id}")
                else:
                    logger.info(f"[OrderService] Code affilié '{order_data.ref}' inconnu, ignoré.")

            await self.order_repository.commit()
        except Exception as e:
            await self.order_repository.rollback()
            logger.exception(f"[OrderService] Échec création commande pour user {order_data.usuario_id}, rollback: {e}")
            raise OrderCreationFailedException() from e

        logger.info(f"[OrderService] Commande ID {order_id} créée pour user {order_data.usuario_id}.")

        try:
            await self.email_service.send_order_confirmation_email(
                recipient_email=recipient_email,
                customer_name=customer_name,
                order_id=order_id,
                total=total,
                items=[item.model_dump() for item in carrito],
            )
        except Exception as e:
            # Logguer l'erreur d'email mais ne pas annuler la commande
            logger.error(f"[OrderService] Erreur envoi email confirmation commande {order_id}: {e}", exc_info=True)

        return order_id

    async def list_pending_orders(self) -> List[PendingOrder]:
        orders = await self.order_repository.list_pending()
        logger.debug(f"[OrderService] {len(orders)} commande(s) en attente.")
        return orders
