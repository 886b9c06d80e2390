# docqa/infrastructure/document_loader.py

import io
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

import fitz
import httpx
import pdfplumber

from docqa.config import REQUEST_TIMEOUT_SECONDS, SUPPORTED_EXTENSIONS
from docqa.domain.errors import ExtractionError
from docqa.domain.interfaces import TextExtractorPort


class DocumentLoader(TextExtractorPort):
    """
    Turns PDF / TXT / MD documents into raw text for corpus building.

    PDFs go through pdfplumber first; PyMuPDF is tried when pdfplumber
    returns no text at all (scanned or oddly encoded files). Chunking is
    not done here; the corpus builder owns it.
    """

    def load_directory(self, directory_path: str) -> Dict[str, str]:
        """
        Return { relative_path: text } for every supported file, sorted by path.
        Files in subdirectories keep their folder prefix ("reports/q1.pdf"),
        so equal filenames in different folders stay separate documents.
        Any extraction failure aborts the whole load.
        """
        data_dir = Path(directory_path)
        if not data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {directory_path}")

        texts: Dict[str, str] = {}
        for file_path in sorted(data_dir.rglob("*")):
            if not file_path.is_file() or file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
                continue
            name = file_path.relative_to(data_dir).as_posix()
            texts[name] = self.extract_text(file_path)
            print(f"[DocumentLoader] Extracted {len(texts[name])} chars from {name}")

        print(f"[DocumentLoader] Total documents loaded: {len(texts)}")
        return texts

    def extract_text(self, source: Union[str, Path, bytes]) -> str:
        if isinstance(source, bytes):
            return self.extract_pdf_bytes(source, name="<bytes>")

        file_path = Path(source)
        suffix = file_path.suffix.lower()
        if suffix in {".txt", ".md"}:
            try:
                return file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as error:
                raise ExtractionError(f"Cannot read {file_path.name}: {error}") from error
        if suffix == ".pdf":
            try:
                data = file_path.read_bytes()
            except OSError as error:
                raise ExtractionError(f"Cannot read {file_path.name}: {error}") from error
            return self.extract_pdf_bytes(data, name=file_path.name)
        raise ExtractionError(f"Unsupported document type: {file_path.name}")

    def extract_url(self, url: str, client: Optional[httpx.Client] = None) -> Tuple[str, str]:
        """
        Download a PDF and extract it. Returns (document_name, text); the
        name is the last path segment of the URL.
        """
        name = urlparse(url).path.rstrip("/").split("/")[-1] or "remote_document.pdf"
        print(f"[DocumentLoader] Downloading {url}")
        try:
            if client is not None:
                response = client.get(url, follow_redirects=True)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
        except httpx.HTTPError as error:
            raise ExtractionError(f"Failed to download {url}: {error}") from error
        return name, self.extract_pdf_bytes(response.content, name=name)

    def extract_pdf_bytes(self, data: bytes, name: str) -> str:
        pages = self._extract_pages_pdfplumber(data, name)

        # Fallback to PyMuPDF
        if not any(text.strip() for text in pages):
            pages = self._extract_pages_pymupdf(data, name)

        return "\n".join(pages)

    # ─── Private: PDF Extractors ──────────────────────────────────────────────

    @staticmethod
    def _extract_pages_pdfplumber(data: bytes, name: str) -> List[str]:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                return [
                    page.extract_text(x_tolerance=2, y_tolerance=2) or ""
                    for page in pdf.pages
                ]
        except Exception as error:
            # PyMuPDF gets a second chance at the same bytes
            print(f"[DocumentLoader] pdfplumber error on {name}: {error}")
            return []

    @staticmethod
    def _extract_pages_pymupdf(data: bytes, name: str) -> List[str]:
        try:
            with fitz.open(stream=data, filetype="pdf") as pdf:
                return [page.get_text() for page in pdf]
        except Exception as error:
            raise ExtractionError(f"Could not extract text from {name}: {error}") from error
