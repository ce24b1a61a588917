import io
import logging
import os
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from floreria.pdf.config import PDFSettings
from floreria.pdf.exceptions import PDFGenerationException
from floreria.pdf.generator import AbstractPDFGenerator
from floreria.pdf.models import ReceiptData

logger = logging.getLogger(__name__)


class ReportLabPDFGenerator(AbstractPDFGenerator):
    """Implémentation du générateur PDF utilisant ReportLab."""

    def __init__(self, settings: PDFSettings):
        self.settings = settings
        # Convertir la couleur HEX en objet couleur ReportLab une seule fois
        self.primary_color = colors.HexColor(settings.PRIMARY_COLOR_HEX)
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            name="FloreriaTitle", parent=styles["Heading1"], textColor=self.primary_color, alignment=1
        )
        self.subtitle_style = styles["h2"]
        self.normal_style = styles["Normal"]
        self.bold_style = ParagraphStyle(name="Bold", parent=self.normal_style, fontName="Helvetica-Bold")
        self.company_info_style = ParagraphStyle(name="CompanyInfo", parent=self.normal_style, alignment=2)
        self.footer_style = ParagraphStyle(name="Footer", fontSize=10, textColor=colors.gray, alignment=1)
        logger.info("[ReportLabPDFGenerator] Initialisé avec la configuration.")

    def _header(self) -> list:
        """Logo (ou nom de la boutique) suivi du bloc d'informations de l'entreprise."""
        elements = []
        try:
            if os.path.exists(self.settings.LOGO_PATH):
                logo = Image(self.settings.LOGO_PATH, width=1.5 * inch, height=0.75 * inch)
                logo.hAlign = "LEFT"
                elements.append(logo)
            else:
                logger.debug(f"[PDFGen] Logo non trouvé : {self.settings.LOGO_PATH}")
        except Exception as img_err:
            logger.error(f"[PDFGen] Erreur chargement logo: {img_err}.", exc_info=True)
        elements.append(Paragraph(self.settings.COMPANY_INFO_HTML, self.company_info_style))
        elements.append(Spacer(1, 0.2 * inch))
        return elements

    def _order_block(self, receipt: ReceiptData) -> list:
        """Identité de la commande puis tableau des lignes avec le total."""
        elements = [
            Paragraph(f"<b>Pedido:</b> #{receipt.orden_id}", self.normal_style),
            Paragraph(f"<b>Cliente:</b> {escape(receipt.cliente)}", self.normal_style),
            Paragraph(f"<b>Fecha:</b> {receipt.fecha.strftime('%d/%m/%Y %H:%M')}", self.normal_style),
            Spacer(1, 0.15 * inch),
        ]

        table_data = [
            [
                Paragraph("<b>Producto</b>", self.normal_style),
                Paragraph("<b>Cantidad</b>", self.normal_style),
                Paragraph("<b>Precio ($)</b>", self.normal_style),
                Paragraph("<b>Subtotal ($)</b>", self.normal_style),
            ]
        ]
        for line in receipt.productos:
            table_data.append([
                Paragraph(escape(line.producto), self.normal_style),
                str(line.cantidad),
                f"{line.precio:.2f}",
                f"{line.subtotal:.2f}",
            ])
        table_data.append([
            Paragraph(" ", self.normal_style),
            Paragraph(" ", self.normal_style),
            Paragraph("<b>Total ($)</b>", self.bold_style),
            Paragraph(f"<b>{receipt.total:.2f}</b>", self.bold_style),
        ])

        table = Table(table_data, colWidths=[3.0 * inch, 1.0 * inch, 1.3 * inch, 1.5 * inch])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), self.primary_color),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -2), 1, colors.darkgrey),
            ("FONTSIZE", (0, 1), (-1, -1), 10),
            ("GRID", (2, -1), (-1, -1), 1, colors.darkgrey),
            ("ALIGN", (2, -1), (-1, -1), "RIGHT"),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
            ("TOPPADDING", (0, -1), (-1, -1), 12),
        ]))
        elements.append(table)
        return elements

    def _build(self, elements: list) -> bytes:
        def add_footer(canvas, doc):
            """Ajoute un pied de page à chaque page du document PDF."""
            canvas.saveState()
            footer = Paragraph(self.settings.FOOTER_TEXT, self.footer_style)
            w, h = footer.wrap(doc.width, doc.bottomMargin)
            footer.drawOn(canvas, doc.leftMargin, h)
            canvas.restoreState()

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=letter)
        try:
            doc.build(elements, onFirstPage=add_footer, onLaterPages=add_footer)
            return buffer.getvalue()
        finally:
            buffer.close()

    async def generate_receipt_pdf(self, receipt: ReceiptData) -> bytes:
        """Génère le comprobante d'une commande.

        Args:
            receipt: Données de la commande (en attente ou archivée).

        Returns:
            Les octets (bytes) du document PDF généré.

        Raises:
            PDFGenerationException: Si une erreur survient pendant la construction du PDF.
        """
        logger.info(f"[PDFGen] Génération comprobante commande #{receipt.orden_id}")
        elements = self._header()
        elements.append(Paragraph("Comprobante de Compra", self.title_style))
        elements.append(Spacer(1, 0.2 * inch))
        elements.extend(self._order_block(receipt))
        elements.append(Spacer(1, 0.4 * inch))
        elements.append(Paragraph("Gracias por tu compra.", self.normal_style))

        try:
            pdf_bytes = self._build(elements)
        except Exception as e:
            logger.error(f"[PDFGen] Erreur ReportLab build() pour commande #{receipt.orden_id}: {e}", exc_info=True)
            raise PDFGenerationException("Erreur lors de la construction du comprobante", original_exception=e)
        logger.info(f"[PDFGen] Comprobante #{receipt.orden_id} généré en mémoire ({len(pdf_bytes)} bytes).")
        return pdf_bytes

    async def generate_summary_pdf(self, receipts: List[ReceiptData]) -> bytes:
        """Génère le résumé des commandes livrées, un bloc par commande."""
        logger.info(f"[PDFGen] Génération résumé de {len(receipts)} commande(s)")
        elements = self._header()
        elements.append(Paragraph("Resumen de Pedidos Entregados", self.title_style))
        elements.append(Spacer(1, 0.3 * inch))
        for receipt in receipts:
            elements.extend(self._order_block(receipt))
            elements.append(Spacer(1, 0.35 * inch))

        try:
            pdf_bytes = self._build(elements)
        except Exception as e:
            logger.error(f"[PDFGen] Erreur ReportLab build() pour le résumé: {e}", exc_info=True)
            raise PDFGenerationException("Erreur lors de la construction du résumé", original_exception=e)
        logger.info(f"[PDFGen] Résumé généré en mémoire ({len(pdf_bytes)} bytes).")
        return pdf_bytes
