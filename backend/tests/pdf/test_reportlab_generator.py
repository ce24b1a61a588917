import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

from floreria.pdf.config import PDFSettings
from floreria.pdf.dependencies import get_pdf_generator
from floreria.pdf.exceptions import PDFGenerationException
from floreria.pdf.models import ReceiptData, ReceiptLine
from floreria.pdf.reportlab_generator import ReportLabPDFGenerator
from floreria.pdf.utils import temporary_pdf, write_pdf


@pytest.fixture
def settings(tmp_path) -> PDFSettings:
    return PDFSettings(TMP_DIR=str(tmp_path / "temp"), LOGO_PATH=str(tmp_path / "absent.png"))


@pytest.fixture
def generator(settings) -> ReportLabPDFGenerator:
    return ReportLabPDFGenerator(settings=settings)


@pytest.fixture
def receipt() -> ReceiptData:
    return ReceiptData(
        orden_id=12,
        cliente="Ana García",
        fecha=datetime(2024, 5, 10, 15, 30, tzinfo=timezone.utc),
        total=Decimal("55.50"),
        productos=[
            ReceiptLine(producto="Rose Bouquet", cantidad=2, precio=Decimal("20.00")),
            ReceiptLine(producto="Tulipanes", cantidad=1, precio=Decimal("15.50")),
        ],
    )


def test_receipt_line_subtotal():
    line = ReceiptLine(producto="Rose Bouquet", cantidad=3, precio=Decimal("20.00"))
    assert line.subtotal == Decimal("60.00")


@pytest.mark.asyncio
async def test_generate_receipt_pdf(generator, receipt):
    pdf_bytes = await generator.generate_receipt_pdf(receipt)
    assert pdf_bytes.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_generate_receipt_pdf_without_lines(generator, receipt):
    empty = receipt.model_copy(update={"productos": [], "total": Decimal("0")})
    pdf_bytes = await generator.generate_receipt_pdf(empty)
    assert pdf_bytes.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_generate_summary_pdf(generator, receipt):
    other = receipt.model_copy(update={"orden_id": 13, "cliente": "Luis Pérez"})
    pdf_bytes = await generator.generate_summary_pdf([receipt, other])
    assert pdf_bytes.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_markup_in_customer_text_is_rendered_literally(generator, receipt):
    tricky = receipt.model_copy(update={
        "cliente": "Ana <i>García",
        "productos": [ReceiptLine(producto="Rosas <b>& Lirios", cantidad=1, precio=Decimal("10.00"))],
    })
    assert (await generator.generate_receipt_pdf(tricky)).startswith(b"%PDF")
    assert (await generator.generate_summary_pdf([tricky])).startswith(b"%PDF")


@pytest.mark.asyncio
async def test_build_failure_raises_generation_exception(generator, receipt):
    with patch("floreria.pdf.reportlab_generator.SimpleDocTemplate.build", side_effect=ValueError("boom")):
        with pytest.raises(PDFGenerationException) as exc_info:
            await generator.generate_receipt_pdf(receipt)
    assert isinstance(exc_info.value.original_exception, ValueError)


def test_get_pdf_generator_uses_settings(settings):
    generator = get_pdf_generator(settings=settings)
    assert isinstance(generator, ReportLabPDFGenerator)
    assert generator.settings is settings


def test_temporary_pdf_is_removed_after_block(tmp_path):
    with temporary_pdf(str(tmp_path / "temp"), "Comprobante-1.pdf", b"%PDF-1.4") as path:
        assert path.exists()
        assert path.name.endswith("Comprobante-1.pdf")
    assert not path.exists()


def test_temporary_pdf_is_removed_on_error(tmp_path):
    with pytest.raises(RuntimeError):
        with temporary_pdf(str(tmp_path / "temp"), "Comprobante-1.pdf", b"%PDF-1.4") as path:
            raise RuntimeError("envoi impossible")
    assert not path.exists()


def test_write_pdf_creates_directory(tmp_path):
    path = write_pdf(str(tmp_path / "exports" / "2024"), "Resumen.pdf", b"%PDF-1.4")
    assert path.read_bytes() == b"%PDF-1.4"
