"""
PDF document source using PyMuPDF for page count and page geometry
"""

import os
from typing import List, Optional, Tuple

import fitz  # PyMuPDF

from utils.debug_logger import debug_logger


class PDFDocument:
    """Loaded drawing document; announces document changes to a session

    Only page metadata is read here. Rendering pages is left to the
    host's viewer.
    """

    def __init__(self):
        self.pdf_document = None
        self.pdf_path: Optional[str] = None
        self._page_sizes: List[Tuple[float, float]] = []
        self._sessions = []

    def attach(self, session):
        """Reset the given MeasurementSession whenever a document loads"""
        self._sessions.append(session)
        if self.pdf_document is not None:
            session.set_page_count(self.page_count)

    def load(self, pdf_path: str) -> int:
        """Open a PDF and return its page count"""
        if not os.path.exists(pdf_path):
            debug_logger.error("PDFDocument", "PDF file not found", data={'path': pdf_path})
            raise FileNotFoundError(f"PDF file not found: {pdf_path}")

        try:
            document = fitz.open(pdf_path)
        except Exception as e:
            debug_logger.error("PDFDocument", "Failed to open PDF", error=e, data={'path': pdf_path})
            raise

        self.close()
        self.pdf_document = document
        self.pdf_path = pdf_path
        self._page_sizes = [(page.rect.width, page.rect.height) for page in document]

        debug_logger.info("PDFDocument", "Loaded PDF",
                          {'path': os.path.basename(pdf_path), 'count': self.page_count})
        for session in self._sessions:
            session.document_changed(self.page_count)
        return self.page_count

    @property
    def page_count(self) -> int:
        return len(self._page_sizes)

    @property
    def file_name(self) -> Optional[str]:
        if not self.pdf_path:
            return None
        return os.path.basename(self.pdf_path)

    def has_page(self, page_number: int) -> bool:
        return 1 <= page_number <= self.page_count

    def page_size(self, page_number: int) -> Tuple[float, float]:
        """Width and height of a 1-indexed page at zoom 1.0"""
        if not self.has_page(page_number):
            raise IndexError(f"Page {page_number} out of range 1..{self.page_count}")
        return self._page_sizes[page_number - 1]

    def close(self):
        """Close the current PDF"""
        if self.pdf_document is not None:
            self.pdf_document.close()
        self.pdf_document = None
        self.pdf_path = None
        self._page_sizes = []
