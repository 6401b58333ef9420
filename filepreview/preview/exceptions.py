from __future__ import annotations

from typing import Optional, Sequence


class PreviewError(Exception):
    """Base error for preview generation."""


class InvalidOutputFormatError(PreviewError):
    """Raised when the output path does not end in gif, jpg or png."""


class InvalidOptionError(PreviewError):
    """Raised when a preview option has a value of the wrong type."""


class ExecutableRejectedError(PreviewError):
    """Raised when the `file` command reports the input as an executable."""


class FetchFailedError(PreviewError):
    """Raised when a remote source cannot be downloaded."""


class FileStatError(PreviewError):
    """Raised when the local input cannot be inspected."""


class NotAFileError(PreviewError):
    """Raised when the local input is not a regular file."""


class UnclassifiedTypeError(PreviewError):
    """Raised when no pipeline handles the classified file type."""


class CleanupError(PreviewError):
    """Raised when a temporary artifact cannot be removed."""


class ConversionError(PreviewError):
    """Raised when an external conversion tool exits with a failure."""

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command or ())
        self.returncode = returncode
        self.stderr = stderr


class VideoConversionError(ConversionError):
    """Raised when ffmpeg fails to extract a frame."""


class ImageConversionError(ConversionError):
    """Raised when ImageMagick fails to rasterize an image or PDF."""


class DocumentConversionError(ConversionError):
    """Raised when a document cannot be converted to PDF or rasterized."""
