"""
Workbook upload endpoint.

Uploading a workbook replaces all league data:
1. The multipart file (field `excelFile`) is written to a temp file
2. Both recognised sheets are parsed and normalized
3. weekly_results and coach_lookup are replaced in one transaction
4. The temp file is deleted, whatever happened

Parsing runs in a worker thread so a large workbook doesn't block other
requests on the event loop.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from ...infrastructure.spreadsheet.loader import WorkbookParseError
from ...infrastructure.sqlite.client import DatabaseError
from ..dependencies import IngestionPipelineDep, SettingsDep
from ..errors import database_error

logger = logging.getLogger(__name__)

router = APIRouter()

CHUNK_SIZE = 1024 * 1024


class UploadResponse(BaseModel):
    """Response after a workbook replaced the league data."""
    message: str = Field(description="Status message")
    weekly_results: int = Field(description="Weekly result rows loaded")
    coach_mappings: int = Field(description="Coach lookup rows loaded")


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload league workbook",
    description="Replace all league data with the weekly_results and coach_lookup sheets of an .xlsx file",
    responses={
        400: {"description": "No file, or not a readable workbook"},
        413: {"description": "Workbook larger than MAX_UPLOAD_SIZE_MB"},
    },
)
async def upload_workbook(
    settings: SettingsDep,
    pipeline: IngestionPipelineDep,
    excel_file: Annotated[
        Optional[UploadFile],
        File(alias="excelFile", description="League workbook (.xlsx)"),
    ] = None,
) -> UploadResponse:
    if excel_file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    logger.info(
        "Processing workbook upload",
        extra={"upload_filename": excel_file.filename, "content_type": excel_file.content_type}
    )

    tmp_path = await _save_upload(excel_file, settings.upload_directory, settings.max_upload_size_bytes)

    try:
        summary = await asyncio.to_thread(pipeline.ingest, tmp_path)

    except WorkbookParseError as e:
        logger.warning(
            "Uploaded file is not a readable workbook",
            extra={"upload_filename": excel_file.filename, "error": str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is not a valid Excel workbook",
        )

    except DatabaseError as e:
        raise database_error(e, settings, "upload")

    finally:
        _remove_temp_file(tmp_path)

    return UploadResponse(
        message="Data uploaded successfully",
        weekly_results=summary.weekly_results,
        coach_mappings=summary.coach_mappings,
    )


async def _save_upload(
    upload: UploadFile,
    directory: Optional[Path],
    max_size_bytes: int,
) -> str:
    """
    Stream the upload into a temp file and return its path.

    The partial file is removed if the upload exceeds the size limit.
    """
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)

    suffix = Path(upload.filename or "").suffix or ".xlsx"

    with tempfile.NamedTemporaryFile(suffix=suffix, dir=directory, delete=False) as tmp:
        tmp_path = tmp.name
        total_size = 0
        try:
            while chunk := await upload.read(CHUNK_SIZE):
                total_size += len(chunk)
                if total_size > max_size_bytes:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=f"Upload exceeds {max_size_bytes // (1024 * 1024)}MB",
                    )
                tmp.write(chunk)
        except BaseException:
            tmp.close()
            _remove_temp_file(tmp_path)
            raise

    logger.debug(
        "Saved upload to temp file",
        extra={"path": tmp_path, "size_bytes": total_size}
    )
    return tmp_path


def _remove_temp_file(path: str) -> None:
    try:
        os.unlink(path)
        logger.debug("Removed temp upload", extra={"path": path})
    except FileNotFoundError:
        pass
