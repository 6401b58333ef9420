from __future__ import annotations

from .commands import CommandBuilder
from .exceptions import (
    CleanupError,
    ConversionError,
    DocumentConversionError,
    ExecutableRejectedError,
    FetchFailedError,
    FileStatError,
    ImageConversionError,
    InvalidOptionError,
    InvalidOutputFormatError,
    NotAFileError,
    PreviewError,
    UnclassifiedTypeError,
    VideoConversionError,
)
from .mime import classify, validate_output_format
from .runner import CommandRunner
from .storage import PreviewStorage
from .types import (
    CommandResult,
    FileType,
    PageRange,
    PreviewOptions,
    PreviewRequest,
    PreviewResult,
)

__all__ = [
    "CleanupError",
    "CommandBuilder",
    "CommandResult",
    "CommandRunner",
    "ConversionError",
    "DocumentConversionError",
    "ExecutableRejectedError",
    "FetchFailedError",
    "FileStatError",
    "FileType",
    "ImageConversionError",
    "InvalidOptionError",
    "InvalidOutputFormatError",
    "NotAFileError",
    "PageRange",
    "PreviewError",
    "PreviewOptions",
    "PreviewRequest",
    "PreviewResult",
    "PreviewStorage",
    "UnclassifiedTypeError",
    "VideoConversionError",
    "classify",
    "validate_output_format",
]
