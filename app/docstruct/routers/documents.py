"""
Router for document endpoints.

Handles:
- Upload of PDF/DOCX files with structured content extraction
- Listing the caller's documents
- Document details and raw file download
- Saving edited structured content

Every operation is scoped to the authenticated user.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from ..config import Settings, get_settings
from ..dependencies import get_current_user_id, get_document_store, get_file_storage
from ..models import (
    DocumentDetails,
    DocumentRecord,
    DocumentSummary,
    SaveDocumentRequest,
    SaveDocumentResponse,
)
from ..services.document_store import DocumentStore, structured_content_text
from ..services.exceptions import (
    DocumentNotFoundError,
    EmptyDocumentError,
    UnsupportedFileTypeError,
)
from ..services.extraction import ExtractionService, get_extraction_service
from ..services.file_storage import (
    FileStorage,
    extension_of,
    file_type_from_name,
    media_type_for,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/pdf", tags=["documents"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="File not found",
    )


@router.post("/upload", response_model=DocumentRecord, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: Annotated[UploadFile | None, File(description="PDF or DOCX file")] = None,
    user_id: int = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    storage: FileStorage = Depends(get_file_storage),
    extraction_service: ExtractionService = Depends(get_extraction_service),
    settings: Settings = Depends(get_settings),
) -> DocumentRecord:
    """
    Upload a file and extract its structured content.

    The raw file is stored on disk and a document row is created with the
    extracted sections (PDF) or paragraphs (DOCX).
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    try:
        file_type = file_type_from_name(file.filename)
    except UnsupportedFileTypeError:
        await file.close()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported file type",
        )

    try:
        # Stop reading one byte past the limit
        content = await file.read(settings.max_upload_bytes + 1)

        if len(content) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="File too large",
            )

        logger.info(
            "Processing %s file: %s (%d bytes)",
            file_type.value.upper(),
            file.filename,
            len(content),
        )

        try:
            blocks = extraction_service.extract(file_type, content)
        except EmptyDocumentError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

        file_url = storage.save(file.filename, content)
        try:
            document = store.create(user_id, file_type, file_url, blocks)
        except Exception:
            storage.delete(file_url)
            raise

        return DocumentRecord(
            id=document.id,
            user_id=document.owner_id,
            data=structured_content_text(document.data),
            file_url=document.file_url,
            file_type=document.file_type.value,
        )

    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to process file")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process file",
        )
    finally:
        await file.close()


@router.get("/", response_model=list[DocumentSummary])
async def list_documents(
    user_id: int = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
) -> list[DocumentSummary]:
    """List the caller's documents."""
    try:
        documents = store.list_for_owner(user_id)
    except Exception:
        logger.exception("Error fetching files")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch files",
        )

    return [
        DocumentSummary(
            id=document.id,
            data=structured_content_text(document.data),
            file_url=document.file_url,
        )
        for document in documents
    ]


@router.get("/download/{document_id}")
async def download_document(
    document_id: int,
    user_id: int = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    storage: FileStorage = Depends(get_file_storage),
) -> FileResponse:
    """
    Stream the raw uploaded file.

    The file is sent inline with a content type matching its extension.
    """
    try:
        document = store.get(user_id, document_id)
        path = storage.resolve(document.file_url)
    except DocumentNotFoundError:
        raise _not_found()
    except Exception:
        logger.exception("Error downloading file %d", document_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to download file",
        )

    if path is None:
        logger.error("File missing on disk: %s", document.file_url)
        raise _not_found()

    return FileResponse(
        path,
        media_type=media_type_for(path),
        filename=path.name,
        content_disposition_type="inline",
    )


@router.get("/details/{document_id}", response_model=DocumentDetails)
async def get_document_details(
    document_id: int,
    user_id: int = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    storage: FileStorage = Depends(get_file_storage),
) -> DocumentDetails:
    """
    Get a document's structured content for the editor.

    The file type is derived from the stored file's extension.
    """
    try:
        document = store.get(user_id, document_id)
        path = storage.resolve(document.file_url)
    except DocumentNotFoundError:
        raise _not_found()
    except Exception:
        logger.exception("Error fetching file details %d", document_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch file details",
        )

    if path is None:
        logger.error("File missing on disk: %s", document.file_url)
        raise _not_found()

    return DocumentDetails(
        id=document.id,
        file_url=document.file_url,
        data=structured_content_text(document.data),
        file_type=extension_of(document.file_url),
    )


@router.post("/save/{document_id}", response_model=SaveDocumentResponse)
async def save_document(
    document_id: int,
    request: SaveDocumentRequest,
    user_id: int = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
) -> SaveDocumentResponse:
    """Replace a document's structured content with the edited version."""
    try:
        document = store.save_content(user_id, document_id, request.data)
    except DocumentNotFoundError:
        raise _not_found()
    except Exception:
        logger.exception("Error saving file %d", document_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save file",
        )

    return SaveDocumentResponse(
        message="File saved successfully",
        data=structured_content_text(document.data),
    )
