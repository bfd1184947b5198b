"""
Document models: the user's selected file and the extraction output.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SelectedFile(BaseModel):
    """
    Handle to the file the user picked.

    Owned by the UI layer. The pipeline only reads it.
    """

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def name(self) -> str:
        """File name sent as the multipart ``filename``."""
        return self.path.name

    def read_bytes(self) -> bytes:
        """Read the whole file. Raises OSError if missing or unreadable."""
        return self.path.read_bytes()


class ExtractedDocument(BaseModel):
    """Text extracted from a PDF."""

    model_config = ConfigDict(frozen=True)

    text: str = ""  # empty for image-only documents
    page_count: int = 0
    title: Optional[str] = None
    author: Optional[str] = None

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words."""
        return len(self.text.split())

