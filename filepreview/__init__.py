"""Still-image previews for images, videos, PDFs and office documents."""

from __future__ import annotations

from filepreview.preview.types import FileType, PreviewOptions, PreviewResult
from filepreview.services.preview_generator import PreviewGeneratorService, generate

__all__ = [
    "FileType",
    "PreviewGeneratorService",
    "PreviewOptions",
    "PreviewResult",
    "generate",
]
