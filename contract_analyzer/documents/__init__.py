"""
Document module - the selected contract file and PDF text extraction.

Usage:
    from contract_analyzer.documents import PdfTextExtractor, SelectedFile

    selected = SelectedFile(path=Path("contract.pdf"))
    extracted = PdfTextExtractor().extract(selected.read_bytes())
    print(extracted.page_count, extracted.has_text)
"""

from .models import (
    SelectedFile,
    ExtractedDocument,
)

from .extractor import (
    PdfTextExtractor,
    PAGE_BREAK,
)


__all__ = [
    # Models
    "SelectedFile",
    "ExtractedDocument",

    # Extractor
    "PdfTextExtractor",
    "PAGE_BREAK",
]
