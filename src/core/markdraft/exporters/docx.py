from __future__ import annotations

import logging
from io import BytesIO

from docx.document import Document as DocumentObject
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from htmldocx import HtmlToDocx

from ..config import DOCXConfig
from ..errors import DOCX_FAILED_MESSAGE, ExportError
from ..models import ConversionRequest, ExportResult, OutputFormat, StyledDocument
from ..utils import run_sync

logger = logging.getLogger(__name__)


def prevent_row_splitting(document: DocumentObject) -> int:
    """Mark every table row ``cantSplit`` so rows never break across pages."""

    marked = 0
    for table in document.tables:
        for row in table.rows:
            tr_pr = row._tr.get_or_add_trPr()
            if tr_pr.find(qn("w:cantSplit")) is None:
                tr_pr.append(OxmlElement("w:cantSplit"))
            marked += 1
    return marked


def drop_headers_and_footers(document: DocumentObject) -> None:
    for section in document.sections:
        section.header.is_linked_to_previous = True
        section.footer.is_linked_to_previous = True


class DocxExporter:
    output_format = OutputFormat.DOCX

    def __init__(self, config: DOCXConfig | None = None) -> None:
        self._config = config or DOCXConfig()

    def build(self, html: str) -> bytes:
        parser = HtmlToDocx()
        document = parser.parse_html_string(html)
        if self._config.cant_split_rows:
            prevent_row_splitting(document)
        drop_headers_and_footers(document)
        buffer = BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    async def export(self, document: StyledDocument, request: ConversionRequest) -> ExportResult:
        try:
            content = await run_sync(self.build, document.complete_html)
        except Exception as exc:
            logger.exception("DOCX conversion failed")
            raise ExportError("DOCX_FAILED", DOCX_FAILED_MESSAGE) from exc
        return ExportResult(
            content=content,
            filename=self._config.filename,
            mime_type=self.output_format.mime_type,
        )


__all__ = ["DocxExporter", "drop_headers_and_footers", "prevent_row_splitting"]
