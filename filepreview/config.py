from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path


def _as_int(value: str, *, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


DEFAULT_PDF_DENSITY = 300
DEFAULT_PDF_COLORSPACE = "rgb"


@dataclass(frozen=True)
class Settings:
    file_command_path: str = os.getenv("FILE_COMMAND_PATH", "file")
    curl_path: str = os.getenv("CURL_PATH", "curl")
    ffmpeg_path: str = os.getenv("FFMPEG_PATH", "ffmpeg")
    convert_path: str = os.getenv("CONVERT_PATH", "convert")
    unoconv_path: str = os.getenv("UNOCONV_PATH", "unoconv")
    temp_directory: Path = Path(os.getenv("PREVIEW_TMP_DIR") or tempfile.gettempdir())
    media_directory: Path = Path(os.getenv("MEDIA_DIR", "previews"))
    pdf_density: int = _as_int(os.getenv("PREVIEW_PDF_DENSITY"), default=DEFAULT_PDF_DENSITY)
    pdf_colorspace: str = os.getenv("PREVIEW_PDF_COLORSPACE", DEFAULT_PDF_COLORSPACE)
    log_level: str = os.getenv("PREVIEW_LOG_LEVEL", "INFO")


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        settings = Settings()
        object.__setattr__(settings, "media_directory", settings.media_directory.expanduser().resolve())
        object.__setattr__(settings, "temp_directory", settings.temp_directory.expanduser().resolve())
        _settings = settings
    return _settings
