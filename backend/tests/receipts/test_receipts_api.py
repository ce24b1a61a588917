import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


# --- Comprobante individuel ---

async def test_receipt_from_archive(
    test_client: AsyncClient, auth_headers_admin, customer, create_delivered_order
):
    await create_delivered_order(15, customer, datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))

    response = await test_client.get("/api/admin/comprobante/15", headers=auth_headers_admin)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="Comprobante-15.pdf"'
    assert response.content.startswith(b"%PDF")


async def test_receipt_falls_back_to_pending_order(
    test_client: AsyncClient, auth_headers_admin, customer, create_pending_order
):
    order = await create_pending_order(customer, [(1, "Rose Bouquet", Decimal("20.00"), 2)])

    response = await test_client.get(f"/api/admin/comprobante/{order.id}", headers=auth_headers_admin)

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


async def test_receipt_with_markup_in_product_name(
    test_client: AsyncClient, auth_headers_admin, customer, create_pending_order
):
    order = await create_pending_order(customer, [(1, "Rosas <b>& Lirios", Decimal("20.00"), 1)])

    response = await test_client.get(f"/api/admin/comprobante/{order.id}", headers=auth_headers_admin)

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


async def test_receipt_not_found(test_client: AsyncClient, auth_headers_admin):
    response = await test_client.get("/api/admin/comprobante/9999", headers=auth_headers_admin)
    assert response.status_code == 404


async def test_receipt_requires_token(test_client: AsyncClient):
    response = await test_client.get("/api/admin/comprobante/1")
    assert response.status_code == 401


# --- Export par période ---

@pytest.fixture
def exports(pdf_settings):
    def _list():
        return sorted(p.name for p in Path(pdf_settings.EXPORT_DIR).glob("*.pdf"))
    return _list


async def test_export_all_without_email(
    test_client: AsyncClient, auth_headers_admin, customer, create_delivered_order, exports, email_sender
):
    await create_delivered_order(1, customer, datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))
    await create_delivered_order(2, customer, datetime(2024, 4, 1, 10, 0, tzinfo=timezone.utc))

    response = await test_client.get("/api/admin/ordenes/exportar-pdf", headers=auth_headers_admin)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "PDF generado y guardado"
    assert data["file"].startswith("Resumen_Pedidos_") and data["file"].endswith(".pdf")
    assert exports() == [data["file"]]
    assert email_sender.sent == []


async def test_export_range_includes_whole_last_day(
    test_client: AsyncClient, auth_headers_admin, customer, create_delivered_order, email_sender
):
    await create_delivered_order(1, customer, datetime(2024, 2, 29, 23, 0, tzinfo=timezone.utc))
    await create_delivered_order(2, customer, datetime(2024, 3, 1, 0, 0, tzinfo=timezone.utc))
    await create_delivered_order(3, customer, datetime(2024, 3, 31, 22, 45, tzinfo=timezone.utc))
    await create_delivered_order(4, customer, datetime(2024, 4, 1, 0, 0, tzinfo=timezone.utc))

    response = await test_client.get(
        "/api/admin/ordenes/exportar-pdf",
        params={"desde": "2024-03-01", "hasta": "2024-03-31", "email": "jefe@example.com"},
        headers=auth_headers_admin,
    )

    assert response.status_code == 200
    assert response.json()["message"] == "PDF enviado por correo y guardado"
    sent = email_sender.sent[0]
    assert sent["recipient_email"] == "jefe@example.com"
    assert sent["subject"] == "Resumen de pedidos entregados"
    assert sent["attachments"][0]["filename"] == response.json()["file"]
    # Seules les commandes 2 et 3 sont dans la période
    assert "<strong>2</strong>" in sent["html_content"]


async def test_export_open_ended_range(
    test_client: AsyncClient, auth_headers_admin, customer, create_delivered_order
):
    await create_delivered_order(1, customer, datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc))

    before = await test_client.get(
        "/api/admin/ordenes/exportar-pdf", params={"hasta": "2024-01-14"}, headers=auth_headers_admin
    )
    after = await test_client.get(
        "/api/admin/ordenes/exportar-pdf", params={"desde": "2024-01-15"}, headers=auth_headers_admin
    )

    assert before.status_code == 404
    assert after.status_code == 200


async def test_export_empty_range(test_client: AsyncClient, auth_headers_admin, exports):
    response = await test_client.get(
        "/api/admin/ordenes/exportar-pdf",
        params={"desde": "2024-01-01", "hasta": "2024-01-31"},
        headers=auth_headers_admin,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "No hay pedidos en ese rango"
    assert exports() == []


async def test_export_email_failure_keeps_file(
    test_client: AsyncClient, auth_headers_admin, customer, create_delivered_order, email_sender, exports
):
    await create_delivered_order(1, customer, datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))
    email_sender.succeed = False

    response = await test_client.get(
        "/api/admin/ordenes/exportar-pdf", params={"email": "jefe@example.com"}, headers=auth_headers_admin
    )

    assert response.status_code == 500
    data = response.json()
    assert exports() == [data["file"]]
    assert "falló el envío de correo" in data["detail"]


async def test_export_rejects_invalid_email(test_client: AsyncClient, auth_headers_admin):
    response = await test_client.get(
        "/api/admin/ordenes/exportar-pdf", params={"email": "pas-un-email"}, headers=auth_headers_admin
    )
    assert response.status_code == 422
