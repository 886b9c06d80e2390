# tests/test_document_loader.py

import fitz
import httpx
import pytest

from docqa.domain.errors import ExtractionError
from docqa.infrastructure.document_loader import DocumentLoader


def _pdf_bytes(text: str) -> bytes:
    pdf = fitz.open()
    page = pdf.new_page()
    page.insert_text((72, 72), text)
    data = pdf.tobytes()
    pdf.close()
    return data


def test_load_directory_reads_supported_files_sorted(tmp_path):
    (tmp_path / "b_notes.txt").write_text("Second file.", encoding="utf-8")
    (tmp_path / "a_readme.md").write_text("First file.", encoding="utf-8")
    (tmp_path / "ignored.csv").write_text("x,y", encoding="utf-8")

    texts = DocumentLoader().load_directory(str(tmp_path))

    assert list(texts) == ["a_readme.md", "b_notes.txt"]
    assert texts["b_notes.txt"] == "Second file."


def test_load_directory_keeps_same_named_files_in_subfolders(tmp_path):
    (tmp_path / "2023").mkdir()
    (tmp_path / "2024").mkdir()
    (tmp_path / "2023" / "report.txt").write_text("Old figures.", encoding="utf-8")
    (tmp_path / "2024" / "report.txt").write_text("New figures.", encoding="utf-8")

    texts = DocumentLoader().load_directory(str(tmp_path))

    assert texts == {
        "2023/report.txt": "Old figures.",
        "2024/report.txt": "New figures.",
    }


def test_load_directory_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DocumentLoader().load_directory(str(tmp_path / "nope"))


def test_load_directory_aborts_on_broken_pdf(tmp_path):
    (tmp_path / "good.txt").write_text("Fine.", encoding="utf-8")
    (tmp_path / "broken.pdf").write_bytes(b"this is not a pdf")

    with pytest.raises(ExtractionError):
        DocumentLoader().load_directory(str(tmp_path))


def test_extract_text_from_pdf_file(tmp_path):
    path = tmp_path / "policy.pdf"
    path.write_bytes(_pdf_bytes("Knee surgery is covered."))

    text = DocumentLoader().extract_text(path)

    assert "Knee surgery is covered" in text


def test_extract_text_from_pdf_bytes():
    text = DocumentLoader().extract_text(_pdf_bytes("Hello PDF world."))
    assert "Hello PDF world" in text


def test_unsupported_type_raises(tmp_path):
    path = tmp_path / "sheet.xlsx"
    path.write_bytes(b"\x00\x01")

    with pytest.raises(ExtractionError, match="Unsupported"):
        DocumentLoader().extract_text(path)


def test_non_utf8_text_file_raises(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"caf\xe9")

    with pytest.raises(ExtractionError):
        DocumentLoader().extract_text(path)


def test_extract_url_downloads_and_names_document():
    data = _pdf_bytes("Remote policy text.")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=data)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    name, text = DocumentLoader().extract_url("https://files.example/docs/policy.pdf?sig=abc", client=client)

    assert name == "policy.pdf"
    assert "Remote policy text" in text


def test_extract_url_http_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(ExtractionError, match="Failed to download"):
        DocumentLoader().extract_url("https://files.example/missing.pdf", client=client)
