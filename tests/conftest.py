"""Pytest configuration and fixtures."""

import io
import os
import shutil
import tempfile
from typing import Callable, Generator

# Configure the app before it is imported
UPLOAD_DIR = tempfile.mkdtemp(prefix="docstruct-uploads-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOAD_DIR"] = UPLOAD_DIR

import pytest
from docx import Document as DocxDocument
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.docstruct.config import get_settings
from app.docstruct.database import Base, SessionLocal, engine
from app.docstruct.main import app
from app.docstruct.services.auth_service import TokenService


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines: list[str]) -> bytes:
    """
    Build a single-page PDF showing each line on its own baseline.

    Object offsets in the xref table are computed, so the result is a
    well-formed file.
    """
    operations = ["BT", "/F1 12 Tf", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            operations.append("0 -16 Td")
        operations.append(f"({_escape_pdf_text(line)}) Tj")
    operations.append("ET")
    stream = "\n".join(operations).encode("latin-1") if lines else b""

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>"
        ),
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    output = io.BytesIO()
    output.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(output.tell())
        output.write(f"{number} 0 obj\n".encode() + body + b"\nendobj\n")

    xref_offset = output.tell()
    output.write(f"xref\n0 {len(objects) + 1}\n".encode())
    output.write(b"0000000000 65535 f \n")
    for offset in offsets:
        output.write(f"{offset:010d} 00000 n \n".encode())
    output.write(
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF".encode()
    )
    return output.getvalue()


def build_docx(paragraphs: list[str], table: list[list[str]] | None = None) -> bytes:
    """Build a DOCX document with the given paragraphs and an optional trailing table."""
    document = DocxDocument()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        docx_table = document.add_table(rows=len(table), cols=len(table[0]))
        for row_index, row in enumerate(table):
            for col_index, value in enumerate(row):
                docx_table.cell(row_index, col_index).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def reset_database() -> Generator[None, None, None]:
    """Give every test empty tables and an empty upload directory."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    shutil.rmtree(UPLOAD_DIR, ignore_errors=True)
    os.makedirs(UPLOAD_DIR, exist_ok=True)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Database session bound to the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(get_settings())


@pytest.fixture
def signup(client: TestClient) -> Callable[[str, str], dict[str, str]]:
    """Sign up a user and return bearer headers for them."""

    def _signup(username: str, password: str = "s3cret-pass") -> dict[str, str]:
        response = client.post(
            "/api/v1/user/signup",
            json={"username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _signup


@pytest.fixture
def auth_headers(signup) -> dict[str, str]:
    return signup("alice")


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    return build_pdf(["1. Introduction", "Hello world", "2. Details", "More text"])


@pytest.fixture
def empty_pdf_bytes() -> bytes:
    return build_pdf([])


@pytest.fixture
def sample_docx_bytes() -> bytes:
    return build_docx(["First paragraph", "", "Second paragraph"])


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    return build_pdf


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    return build_docx
