"""Service for generating PDF from rendered documents."""

from typing import Optional
from cvgenius.logger import _log_info
from cvgenius.models.document_models import DocumentModel
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.services.renderer import DocumentRenderer


PAGE_CSS = """
@page {
    size: A4;
    margin: 0;
}
"""


class PDFGenerator:
    """Service to generate PDF from rendered HTML using WeasyPrint."""

    def __init__(self, renderer: Optional[DocumentRenderer] = None):
        """
        Initialize the PDF generator.

        Args:
            renderer: Document renderer instance. If None, creates a new one.
        """
        if renderer is None:
            renderer = DocumentRenderer()
        self.renderer = renderer

    def generate_pdf(self, document: DocumentModel, template: TemplateDefinition) -> bytes:
        """
        Generate PDF from a document.

        Args:
            document: Document to export
            template: Catalogue template to render it with

        Returns:
            bytes: PDF file as bytes
        """
        # WeasyPrint needs native Pango/Cairo libraries; load it only when exporting
        from weasyprint import HTML as WeasyHTML, CSS

        page = self.renderer.render_page(document, template)

        # A4 portrait; document margins come from its design settings
        pdf_bytes = WeasyHTML(string=page).write_pdf(stylesheets=[CSS(string=PAGE_CSS)])

        _log_info(f"Exported PDF with '{template.id}' ({len(pdf_bytes)} bytes)")
        return pdf_bytes
