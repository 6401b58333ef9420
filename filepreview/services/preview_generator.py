from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Type, Union

from filepreview.config import Settings, get_settings
from filepreview.preview.commands import CommandBuilder
from filepreview.preview.exceptions import (
    CleanupError,
    ConversionError,
    DocumentConversionError,
    ExecutableRejectedError,
    FetchFailedError,
    FileStatError,
    ImageConversionError,
    NotAFileError,
    UnclassifiedTypeError,
    VideoConversionError,
)
from filepreview.preview.mime import classify, extension_of, is_remote, validate_output_format
from filepreview.preview.runner import CommandRunner
from filepreview.preview.storage import PreviewStorage
from filepreview.preview.types import (
    CommandResult,
    FileType,
    PreviewOptions,
    PreviewRequest,
    PreviewResult,
)

logger = logging.getLogger(__name__)

OptionsArg = Union[PreviewOptions, Mapping[str, Any], None]


class PreviewGeneratorService:
    """Turns an image, video or document into a still preview image.

    Each call to :meth:`generate` validates the output format, classifies the
    source by extension, downloads remote sources, rejects executables and
    then runs exactly one of the video, image or document pipelines. Every
    temporary file created along the way is removed before returning.
    """

    _EXECUTABLE_MARKER = "executable"

    def __init__(
        self,
        storage: PreviewStorage,
        settings: Settings,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._runner = runner or CommandRunner()
        self._commands = CommandBuilder(settings)

    async def generate(
        self,
        source: Union[str, Path],
        output: Union[str, Path],
        options: OptionsArg = None,
    ) -> PreviewResult:
        request = PreviewRequest(
            source=str(source),
            output=Path(output),
            options=PreviewOptions.coerce(options),
        )
        validate_output_format(str(request.output))
        file_type = classify(request.source)
        logger.debug("Classified %s as %s", request.source, file_type.value)

        temporaries: List[Path] = []
        try:
            input_path = Path(request.source)
            if is_remote(request.source):
                input_path = await self._fetch(request.source, temporaries)
            self._ensure_regular_file(input_path)
            await self._reject_executable(input_path)
            outputs = await self._dispatch(file_type, input_path, request, temporaries)
        except BaseException:
            self._discard(temporaries, strict=False)
            raise
        self._discard(temporaries, strict=True)

        logger.info("Generated %d preview(s) for %s", len(outputs), request.source)
        return PreviewResult(source=request.source, file_type=file_type, outputs=outputs)

    async def _fetch(self, url: str, temporaries: List[Path]) -> Path:
        destination = self._storage.build_download_path(url)
        temporaries.append(destination)
        result = await self._runner.run(self._commands.fetch(url, destination))
        if not result.ok:
            raise FetchFailedError(
                f"Failed to download {url} (curl exited with code {result.returncode}): {result.stderr}"
            )
        logger.debug("Downloaded %s to %s", url, destination)
        return destination

    @staticmethod
    def _ensure_regular_file(path: Path) -> None:
        try:
            info = path.lstat()
        except OSError as exc:
            raise FileStatError(f"Unable to open '{path}': {exc}") from exc
        if not stat.S_ISREG(info.st_mode):
            raise NotAFileError(f"'{path}' is not a regular file")

    async def _reject_executable(self, path: Path) -> None:
        result = await self._runner.run(self._commands.identify(path))
        if not result.ok:
            raise FileStatError(f"File type identification failed for '{path}': {result.stderr}")
        # Substring match on the whole description, not a parsed type field.
        if self._EXECUTABLE_MARKER in result.stdout:
            raise ExecutableRejectedError(f"'{path}' is an executable")

    async def _dispatch(
        self,
        file_type: FileType,
        source: Path,
        request: PreviewRequest,
        temporaries: List[Path],
    ) -> Tuple[Path, ...]:
        if file_type is FileType.VIDEO:
            return await self._render_video(source, request)
        if file_type is FileType.IMAGE:
            return await self._render_image(source, request)
        if file_type is FileType.OTHER:
            return await self._render_document(source, request, temporaries)
        raise UnclassifiedTypeError(f"No preview pipeline for file type {file_type!r}")

    async def _render_video(self, source: Path, request: PreviewRequest) -> Tuple[Path, ...]:
        command = self._commands.video_frame(source, request.output, request.options)
        await self._run_checked(command, VideoConversionError, "ffmpeg")
        return (request.output,)

    async def _render_image(self, source: Path, request: PreviewRequest) -> Tuple[Path, ...]:
        command = self._commands.rasterize(
            source,
            request.output,
            request.options,
            is_pdf=extension_of(request.source) == "pdf",
        )
        await self._run_checked(command, ImageConversionError, "convert")
        return (request.output,)

    async def _render_document(
        self,
        source: Path,
        request: PreviewRequest,
        temporaries: List[Path],
    ) -> Tuple[Path, ...]:
        page_range = request.options.page_range
        pdf_path = self._storage.build_temp_path(".pdf")
        temporaries.append(pdf_path)
        await self._run_checked(
            self._commands.document_to_pdf(source, pdf_path, page_range),
            DocumentConversionError,
            "unoconv",
        )

        if page_range.is_single_page:
            command = self._commands.rasterize(pdf_path, request.output, request.options)
            await self._run_checked(command, DocumentConversionError, "convert")
            return (request.output,)

        outputs: List[Path] = []
        for index in range(page_range.page_count):
            page_output = self._storage.page_output_path(request.output, index)
            command = self._commands.rasterize(pdf_path, page_output, request.options, frame=index)
            await self._run_checked(
                command,
                DocumentConversionError,
                "convert",
                context=f"page {index}",
            )
            outputs.append(page_output)
        return tuple(outputs)

    async def _run_checked(
        self,
        command: List[str],
        error_type: Type[ConversionError],
        tool: str,
        *,
        context: Optional[str] = None,
    ) -> CommandResult:
        result = await self._runner.run(command)
        if not result.ok:
            where = f" ({context})" if context else ""
            raise error_type(
                f"{tool} failed{where} with code {result.returncode}: {result.stderr}",
                command=result.command,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result

    def _discard(self, paths: List[Path], *, strict: bool) -> None:
        failures: List[CleanupError] = []
        for path in paths:
            try:
                self._storage.cleanup(path)
            except CleanupError as exc:
                logger.warning("%s", exc)
                failures.append(exc)
        if strict and failures:
            raise failures[0]


async def generate(
    source: Union[str, Path],
    output: Union[str, Path],
    options: OptionsArg = None,
    *,
    settings: Optional[Settings] = None,
) -> PreviewResult:
    """Generate a preview of ``source`` at ``output`` with default wiring."""
    settings = settings or get_settings()
    service = PreviewGeneratorService(
        storage=PreviewStorage(settings.temp_directory),
        settings=settings,
    )
    return await service.generate(source, output, options)
