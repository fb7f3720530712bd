# tests/test_parse_utils.py
import pytest

from careerhub.services.parse_utils import clean_text, is_pdf_bytes, parse_pdf_bytes


def test_is_pdf_bytes():
    assert is_pdf_bytes(b"%PDF-1.7\n...")
    assert is_pdf_bytes(b"\n  %PDF-1.4")
    assert not is_pdf_bytes(b"PK\x03\x04 docx")


def test_non_pdf_rejected():
    with pytest.raises(ValueError):
        parse_pdf_bytes(b"plain text")


def test_clean_text():
    assert clean_text("  Budi\n\nSantoso\t\x0c Jakarta ") == "Budi Santoso Jakarta"
    assert clean_text(None) == ""
