"""PDF text extraction for attachment context.

Responsibilities:
    - Header and emptiness checks before parsing
    - Page-by-page text extraction with pypdf
    - Tolerance for individual unreadable pages

Scanned PDFs yield empty text rather than an error; the question is still
answered without document context.
"""

from problem_solver.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = ["PDFContent", "PDFParseError", "parse_pdf"]
