import pytest
from httpx import ASGITransport, AsyncClient

from floreria.main import app
from floreria.products.dependencies import get_product_service

pytestmark = pytest.mark.asyncio


async def test_health_check(test_client: AsyncClient):
    response = await test_client.get("/")
    assert response.status_code == 200
    assert response.text == "API de la Florería funcionando ✅"


async def test_unhandled_error_returns_generic_message():
    def broken_service():
        raise RuntimeError("connexion perdue")

    app.dependency_overrides[get_product_service] = broken_service
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/productos")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Error interno del servidor"}
