from __future__ import annotations

from functools import lru_cache

from filepreview.config import get_settings
from filepreview.preview.storage import PreviewStorage
from filepreview.services.preview_generator import PreviewGeneratorService


@lru_cache(maxsize=1)
def get_preview_storage() -> PreviewStorage:
    settings = get_settings()
    return PreviewStorage(settings.temp_directory, settings.media_directory / "outputs")


@lru_cache(maxsize=1)
def get_preview_service() -> PreviewGeneratorService:
    settings = get_settings()
    return PreviewGeneratorService(storage=get_preview_storage(), settings=settings)
