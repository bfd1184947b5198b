"""
PDF text extraction.

Thin adapter over PyMuPDF: bytes in, text out, or ExtractionFailure when the
bytes are not a readable document at all.
"""

import asyncio

import fitz  # PyMuPDF
import structlog

from contract_analyzer.exceptions import ExtractionFailure

from .models import ExtractedDocument

logger = structlog.get_logger("documents")

PAGE_BREAK = "\f"


class PdfTextExtractor:
    """
    Extracts the text layer of a PDF held in memory.

    Stateless: no network access, nothing written to disk.
    """

    def extract(self, file_bytes: bytes) -> ExtractedDocument:
        """
        Extract text from PDF bytes.

        Args:
            file_bytes: Raw bytes of a file claimed to be a PDF

        Returns:
            ExtractedDocument. ``text`` is empty for image-only PDFs.

        Raises:
            ExtractionFailure: If the bytes cannot be opened as a PDF
        """
        if not file_bytes:
            raise ExtractionFailure("Failed to extract text from PDF: file is empty")

        try:
            with fitz.open(stream=file_bytes, filetype="pdf") as doc:
                pages = [page.get_text().strip() for page in doc]
                metadata = doc.metadata or {}
                page_count = len(doc)
        except Exception as e:
            logger.error("PDF open failed", size=len(file_bytes), error=str(e))
            raise ExtractionFailure(f"Failed to extract text from PDF: {e}", cause=e) from e

        text = PAGE_BREAK.join(pages)
        if not text.strip():
            text = ""

        logger.info("PDF parsed", pages=page_count, chars=len(text))

        return ExtractedDocument(
            text=text,
            page_count=page_count,
            title=metadata.get("title") or None,
            author=metadata.get("author") or None,
        )

    async def extract_async(self, file_bytes: bytes) -> ExtractedDocument:
        """Run ``extract`` in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(self.extract, file_bytes)
