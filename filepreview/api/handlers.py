from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from filepreview.dependencies import get_preview_service, get_preview_storage
from filepreview.models import (
    OutputFormat,
    PreviewFile,
    PreviewOptionsModel,
    PreviewResponse,
    PreviewUrlRequest,
)
from filepreview.preview.exceptions import (
    CleanupError,
    ExecutableRejectedError,
    FetchFailedError,
    FileStatError,
    InvalidOptionError,
    InvalidOutputFormatError,
    NotAFileError,
    PreviewError,
)
from filepreview.preview.storage import PreviewStorage
from filepreview.preview.types import PreviewResult
from filepreview.services.preview_generator import PreviewGeneratorService

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024

router = APIRouter()
previews_router = APIRouter(prefix="/previews", tags=["previews"])


def _to_http_error(exc: PreviewError) -> HTTPException:
    if isinstance(
        exc, (InvalidOutputFormatError, InvalidOptionError, ExecutableRejectedError, NotAFileError)
    ):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, FileStatError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, FetchFailedError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(exc))


def _to_response(result: PreviewResult) -> PreviewResponse:
    previews = [
        PreviewFile(
            name=path.name,
            path=str(path),
            size_bytes=path.stat().st_size if path.exists() else 0,
        )
        for path in result.outputs
    ]
    return PreviewResponse(file_type=result.file_type.value, previews=previews)


async def _save_upload(upload: UploadFile, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        with destination.open("wb") as buffer:
            while True:
                chunk = await upload.read(_CHUNK_SIZE)
                if not chunk:
                    break
                buffer.write(chunk)
    finally:
        await upload.close()


@previews_router.post("/generate", response_model=PreviewResponse)
async def generate_from_url(
    request: PreviewUrlRequest,
    service: PreviewGeneratorService = Depends(get_preview_service),
    storage: PreviewStorage = Depends(get_preview_storage),
) -> PreviewResponse:
    output = storage.build_output_path(request.format)
    try:
        result = await service.generate(
            str(request.url),
            output,
            request.options.model_dump(exclude_none=True),
        )
    except PreviewError as exc:
        raise _to_http_error(exc) from exc
    return _to_response(result)


@previews_router.post("/upload", response_model=PreviewResponse)
async def generate_from_upload(
    file: UploadFile = File(...),
    format: OutputFormat = Form("jpg"),
    width: Optional[int] = Form(None),
    height: Optional[int] = Form(None),
    force_aspect: bool = Form(False),
    quality: Optional[int] = Form(None),
    background: Optional[str] = Form(None),
    colorspace: Optional[str] = Form(None),
    density: Optional[int] = Form(None),
    autorotate: bool = Form(False),
    trim: bool = Form(False),
    pagerange: Optional[str] = Form(None),
    service: PreviewGeneratorService = Depends(get_preview_service),
    storage: PreviewStorage = Depends(get_preview_storage),
) -> PreviewResponse:
    try:
        options = PreviewOptionsModel(
            width=width,
            height=height,
            force_aspect=force_aspect,
            quality=quality,
            background=background,
            colorspace=colorspace,
            density=density,
            autorotate=autorotate,
            trim=trim,
            pagerange=pagerange,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    # The extension drives classification, so keep the uploaded one.
    suffix = Path(file.filename or "upload").suffix
    temp_path = storage.build_temp_path(suffix)
    output = storage.build_output_path(format)
    try:
        await _save_upload(file, temp_path)
        result = await service.generate(temp_path, output, options.model_dump(exclude_none=True))
    except PreviewError as exc:
        raise _to_http_error(exc) from exc
    finally:
        try:
            storage.cleanup(temp_path)
        except CleanupError as exc:
            logger.warning("%s", exc)
    return _to_response(result)


@previews_router.get("/files/{name}")
async def download_preview(
    name: str,
    storage: PreviewStorage = Depends(get_preview_storage),
) -> FileResponse:
    path = storage.resolve_output(name)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preview not found")
    return FileResponse(path)


router.include_router(previews_router)
