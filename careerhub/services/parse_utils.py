# careerhub/services/parse_utils.py
"""
Helpers to extract text from uploaded CV bytes.
- PDF -> pdfminer.six
- anything else is rejected; candidates upload CVs as PDF
"""

import io
import re

from pdfminer.high_level import extract_text_to_fp
from pdfminer.layout import LAParams

_WS = re.compile(r"\s+")


def is_pdf_bytes(b: bytes) -> bool:
    return b.lstrip()[:5] == b"%PDF-"


def parse_pdf_bytes(b: bytes) -> str:
    """
    Extract text from PDF bytes using pdfminer.six high-level API.
    Blocking; call it from an executor inside async code.
    """
    if not is_pdf_bytes(b):
        raise ValueError("File is not a PDF document")
    output = io.StringIO()
    extract_text_to_fp(io.BytesIO(b), output, laparams=LAParams())
    return output.getvalue()


def clean_text(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WS.sub(" ", text or "").strip()
