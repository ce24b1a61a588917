# Standard Library
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator, Dict, List, Optional

# Third-Party Libraries
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# First-Party Libraries (Your project)
from floreria.main import app
from floreria.database import get_db_session
from floreria.auth.security import create_access_token
from floreria.deliveries.models import DeliveredOrder
from floreria.email.dependencies import get_email_sender
from floreria.email.sender import AbstractEmailSender
from floreria.orders.models import Order, OrderDetail, OrderProduct
from floreria.pdf.config import PDFSettings
from floreria.pdf.dependencies import get_pdf_settings
from floreria.products.models import Product
from floreria.users.models import ROLE_ADMIN, User

# URL de base pour la DB en mémoire
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingEmailSender(AbstractEmailSender):
    """Sender de test : mémorise les emails au lieu de les envoyer."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.succeed = True

    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        sender_email: Optional[str] = None,
        attachments: Optional[List[Dict[str, Any]]] = None,
    ) -> bool:
        self.sent.append({
            "recipient_email": recipient_email,
            "subject": subject,
            "html_content": html_content,
            "attachments": attachments or [],
        })
        return self.succeed


# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def pdf_settings(tmp_path) -> PDFSettings:
    return PDFSettings(
        TMP_DIR=str(tmp_path / "temp"),
        EXPORT_DIR=str(tmp_path / "exports"),
        LOGO_PATH=str(tmp_path / "absent-logo.png"),
    )


@pytest_asyncio.fixture(scope="function")
async def test_client(
    db_session: AsyncSession, email_sender: RecordingEmailSender, pdf_settings: PDFSettings
) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient httpx branché sur la session de test, le sender mémoire et un dossier PDF temporaire."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_pdf_settings] = lambda: pdf_settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# --- Fixtures Utilisateur et Authentification ---

async def _add_user(db_session: AsyncSession, **fields) -> User:
    user = User(**fields)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def customer(db_session: AsyncSession) -> User:
    return await _add_user(db_session, nombre="Ana", apellido="García", email="ana@example.com")


@pytest_asyncio.fixture(scope="function")
async def affiliate(db_session: AsyncSession) -> User:
    return await _add_user(
        db_session, nombre="Luis", apellido="Pérez", email="luis@example.com", codigo_afiliado="LUIS7"
    )


@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    return await _add_user(
        db_session, nombre="Admin", apellido="Floreria", email="admin@example.com", rol=ROLE_ADMIN
    )


@pytest.fixture
def auth_headers_admin(admin_user: User) -> dict[str, str]:
    access_token = create_access_token(data={"sub": str(admin_user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers_customer(customer: User) -> dict[str, str]:
    access_token = create_access_token(data={"sub": str(customer.id)})
    return {"Authorization": f"Bearer {access_token}"}


# --- Fixtures Produits et Commandes ---

@pytest_asyncio.fixture(scope="function")
async def catalog(db_session: AsyncSession) -> List[Product]:
    """Quatre produits couvrant plusieurs saisons et origines."""
    products = [
        Product(nombre="Rose Bouquet", descripcion="Doce rosas rojas", precio=Decimal("20.00"),
                temporada_flor="primavera", origen="nacional", pais="Chile"),
        Product(nombre="Tulipanes", precio=Decimal("15.50"),
                temporada_flor="primavera", origen="importado", pais="Holanda"),
        Product(nombre="Girasoles", precio=Decimal("12.00"),
                temporada_flor="verano", origen="nacional", pais="Chile"),
        Product(nombre="Orquídea", precio=Decimal("30.00"),
                temporada_flor="invierno", origen="importado", pais="Ecuador"),
    ]
    db_session.add_all(products)
    await db_session.commit()
    for product in products:
        await db_session.refresh(product)
    return products


@pytest.fixture
def create_pending_order(db_session: AsyncSession):
    """Fabrique une commande en attente avec ses lignes dans les deux tables."""
    async def _create(user: User, lines: List[tuple], fecha: Optional[datetime] = None) -> Order:
        total = sum((precio * cantidad for _, _, precio, cantidad in lines), Decimal(0))
        order = Order(usuario_id=user.id, total=total, fecha=fecha or datetime(2024, 5, 10, 15, 30, tzinfo=timezone.utc))
        db_session.add(order)
        await db_session.flush()
        for producto_id, nombre, precio, cantidad in lines:
            db_session.add(OrderProduct(orden_id=order.id, producto_id=producto_id, cantidad=cantidad, precio=precio))
            db_session.add(OrderDetail(orden_id=order.id, producto_id=producto_id, nombre=nombre,
                                       precio=precio, cantidad=cantidad))
        await db_session.commit()
        return order
    return _create


@pytest.fixture
def create_delivered_order(db_session: AsyncSession):
    """Fabrique directement une archive de commande livrée."""
    async def _create(orden_id: int, user: User, fecha: datetime, total: Decimal = Decimal("40.00")) -> DeliveredOrder:
        delivered = DeliveredOrder(
            orden_id=orden_id,
            usuario_id=user.id,
            cliente=user.full_name,
            fecha=fecha,
            total=total,
            productos=[{"producto": "Rose Bouquet", "cantidad": 2, "precio": float(total / 2)}],
        )
        db_session.add(delivered)
        await db_session.commit()
        await db_session.refresh(delivered)
        return delivered
    return _create
