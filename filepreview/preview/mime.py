from __future__ import annotations

from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import unquote, urlparse

from .exceptions import InvalidOutputFormatError
from .types import FileType

OUTPUT_FORMATS: Tuple[str, ...] = ("gif", "jpg", "png")

# Order matters: the first MIME type that lists an extension decides its class.
MIME_EXTENSIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "application/msword": ("doc", "dot"),
        "application/pdf": ("pdf",),
        "application/postscript": ("ai", "eps", "ps"),
        "application/rtf": ("rtf",),
        "application/vnd.ms-excel": ("xls", "xlm", "xla", "xlc", "xlt", "xlw"),
        "application/vnd.ms-powerpoint": ("ppt", "pps", "pot"),
        "application/vnd.oasis.opendocument.presentation": ("odp",),
        "application/vnd.oasis.opendocument.spreadsheet": ("ods",),
        "application/vnd.oasis.opendocument.text": ("odt",),
        "application/vnd.openxmlformats-officedocument.presentationml.presentation": ("pptx",),
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ("xlsx",),
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ("docx",),
        "application/x-shockwave-flash": ("swf",),
        "image/avif": ("avif",),
        "image/bmp": ("bmp", "dib"),
        "image/gif": ("gif",),
        "image/heic": ("heic",),
        "image/heif": ("heif",),
        "image/jp2": ("jp2", "jpg2"),
        "image/jpeg": ("jpeg", "jpg", "jpe"),
        "image/png": ("png",),
        "image/svg+xml": ("svg", "svgz"),
        "image/tiff": ("tif", "tiff"),
        "image/vnd.adobe.photoshop": ("psd",),
        "image/vnd.microsoft.icon": ("ico",),
        "image/webp": ("webp",),
        "image/x-pcx": ("pcx",),
        "image/x-portable-anymap": ("pnm",),
        "image/x-portable-bitmap": ("pbm",),
        "image/x-portable-graymap": ("pgm",),
        "image/x-portable-pixmap": ("ppm",),
        "image/x-tga": ("tga",),
        "image/x-xcf": ("xcf",),
        "text/csv": ("csv",),
        "text/html": ("html", "htm", "shtml"),
        "text/plain": ("txt", "text", "conf", "def", "list", "log", "in", "ini"),
        "video/3gpp": ("3gp", "3gpp"),
        "video/3gpp2": ("3g2",),
        "video/h264": ("h264",),
        "video/mp2t": ("ts", "m2t", "m2ts", "mts"),
        "video/mp4": ("mp4", "mp4v", "mpg4", "m4v"),
        "video/mpeg": ("mpeg", "mpg", "mpe", "m1v", "m2v"),
        "video/ogg": ("ogv",),
        "video/quicktime": ("qt", "mov"),
        "video/webm": ("webm",),
        "video/x-flv": ("flv",),
        "video/x-matroska": ("mkv", "mk3d", "mks"),
        "video/x-ms-asf": ("asf", "asx"),
        "video/x-ms-wmv": ("wmv",),
        "video/x-msvideo": ("avi",),
    }
)


def _build_extension_index(table: Mapping[str, Tuple[str, ...]]) -> Mapping[str, str]:
    index = {}
    for mime_type, extensions in table.items():
        for extension in extensions:
            index.setdefault(extension, mime_type)
    return MappingProxyType(index)


_EXTENSION_INDEX = _build_extension_index(MIME_EXTENSIONS)


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def source_filename(source: str) -> str:
    """Last path segment of a local path or URL, without query or fragment."""
    if is_remote(source):
        path = unquote(urlparse(source).path)
        return PurePosixPath(path).name
    return PurePosixPath(source.replace("\\", "/")).name


def extension_of(source: str) -> str:
    return PurePosixPath(source_filename(source)).suffix.lower().lstrip(".")


def mime_type_for(extension: str) -> Optional[str]:
    return _EXTENSION_INDEX.get(extension.lower().lstrip("."))


def classify(source: str) -> FileType:
    extension = extension_of(source)
    if extension == "pdf":
        return FileType.IMAGE
    mime_type = mime_type_for(extension)
    if mime_type is None:
        return FileType.OTHER
    major = mime_type.split("/", 1)[0]
    if major == "image":
        return FileType.IMAGE
    if major == "video":
        return FileType.VIDEO
    return FileType.OTHER


def validate_output_format(output: str) -> str:
    extension = extension_of(str(output))
    if extension not in OUTPUT_FORMATS:
        raise InvalidOutputFormatError(
            f"Unsupported output format '{extension or output}'; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    return extension
