from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from filepreview.config import Settings

from .types import PageRange, PreviewOptions


class CommandBuilder:
    """Builds argument lists for the external preview tools."""

    _VIDEO_FILTER = "thumbnail"
    _CURL_FLAGS = ("--silent", "--show-error", "--fail", "--location")

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def identify(self, source: Path) -> List[str]:
        return [self._settings.file_command_path, str(source)]

    def fetch(self, url: str, destination: Path) -> List[str]:
        return [self._settings.curl_path, *self._CURL_FLAGS, url, "-o", str(destination)]

    def video_frame(self, source: Path, output: Path, options: PreviewOptions) -> List[str]:
        video_filter = self._VIDEO_FILTER
        if options.has_size:
            video_filter = f"{video_filter},scale={options.width}:{options.height}"
            if options.force_aspect:
                video_filter = f"{video_filter}:force_original_aspect_ratio=decrease"
        return [
            self._settings.ffmpeg_path,
            "-y",
            "-i",
            str(source),
            "-vf",
            video_filter,
            "-frames:v",
            "1",
            str(output),
        ]

    def rasterize(
        self,
        source: Path,
        output: Path,
        options: PreviewOptions,
        *,
        frame: int = 0,
        is_pdf: bool = False,
    ) -> List[str]:
        density: Optional[int] = options.density
        colorspace: Optional[str] = options.colorspace
        if is_pdf:
            density = density or self._settings.pdf_density
            colorspace = colorspace or self._settings.pdf_colorspace

        # Reader settings must precede the input so they apply while decoding.
        command = [self._settings.convert_path]
        if density:
            command.extend(["-density", str(density)])
        if colorspace:
            command.extend(["-colorspace", colorspace])
        if options.background:
            command.extend(["-background", options.background])
        command.append(f"{source}[{frame}]")

        if options.background:
            command.append("-flatten")
        if options.autorotate:
            command.append("-auto-orient")
        if options.has_size:
            command.extend(["-resize", f"{options.width}x{options.height}"])
        if options.trim:
            command.extend(["-trim", "+repage"])
        if options.quality:
            command.extend(["-quality", str(options.quality)])
        command.append(str(output))
        return command

    def document_to_pdf(self, source: Path, destination: Path, page_range: PageRange) -> List[str]:
        return [
            self._settings.unoconv_path,
            "-e",
            f"PageRange={page_range.as_unoconv()}",
            "-o",
            str(destination),
            str(source),
        ]
