"""
Upload endpoint.

POST /api/upload takes a multipart form with one file part named 'file'
and an optional 'meta' field holding JSON. The file goes to the
configured Drive folder; the response carries the new file's id and
its browsable link.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, Request, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field

from ...core.errors import ClientInputError, PayloadTooLarge
from ...core.models import DEFAULT_MIME_TYPE, UploadRequest, parse_metadata
from ..dependencies import SettingsDep, UploadServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class UploadResponse(BaseModel):
    """Identifier and link of the created Drive file."""
    model_config = ConfigDict(populate_by_name=True)

    file_id: str = Field(alias="fileId", description="Drive file id")
    web_view_link: str = Field(alias="webViewLink", description="Link to open the file in Drive")


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------

async def read_limited(file: UploadFile, limit_bytes: int) -> bytes:
    """
    Read the whole upload, refusing anything over limit_bytes.

    Reads at most limit_bytes + 1, which is enough to tell "exactly at
    the limit" from "over it" without buffering an oversized body.
    """
    content = await file.read(limit_bytes + 1)
    if len(content) > limit_bytes:
        raise PayloadTooLarge(limit_bytes)
    return content


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload a file to Drive",
    description="Store the uploaded file in the configured Drive folder with the metadata as its description",
    responses={
        400: {"model": ErrorResponse, "description": "No file provided"},
        413: {"model": ErrorResponse, "description": "File exceeds the size limit"},
        500: {"model": ErrorResponse, "description": "Configuration or Drive failure"},
    },
)
async def upload_file(
    http_request: Request,
    service: UploadServiceDep,
    settings: SettingsDep,
    file: Annotated[Optional[UploadFile], File(description="File to store")] = None,
    meta: Annotated[Optional[str], Form(description="JSON metadata, stored as the file description")] = None,
) -> UploadResponse:
    """
    Relay one file to Google Drive.

    Malformed 'meta' is not an error: it is replaced by {} and the
    upload goes ahead. Every upload creates a new Drive file, even for
    identical requests.
    """
    if file is None or not file.filename:
        raise ClientInputError("No file provided")

    # FastAPI binds only the last part of a repeated field; the parsed form is cached
    form = await http_request.form()
    if len(form.getlist("file")) > 1:
        raise ClientInputError("Only one file may be uploaded")

    content = await read_limited(file, settings.max_file_bytes)

    request = UploadRequest(
        content=content,
        filename=file.filename,
        mime_type=file.content_type or DEFAULT_MIME_TYPE,
        metadata=parse_metadata(meta),
    )

    logger.debug(
        "Upload received",
        extra={
            "file_name": request.filename,
            "content_type": request.mime_type,
            "size_bytes": request.size_bytes,
        }
    )

    result = await service.upload(request)

    return UploadResponse(
        file_id=result.file_id,
        web_view_link=result.web_view_link,
    )
