from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from .exceptions import InvalidOptionError

logger = logging.getLogger(__name__)

_PAGE_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")

# camelCase spellings accepted alongside the field names
_OPTION_ALIASES = {
    "forceAspect": "force_aspect",
    "colorSpace": "colorspace",
    "color_space": "colorspace",
    "pageRange": "pagerange",
    "page_range": "pagerange",
}

_INT_OPTIONS = frozenset({"width", "height", "quality", "density"})
_BOOL_OPTIONS = frozenset({"force_aspect", "autorotate", "trim"})
_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


def _convert_option(name: str, value: Any) -> Any:
    if name in _BOOL_OPTIONS:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise InvalidOptionError(f"Option '{name}' expects a boolean, got {value!r}")
    if name in _INT_OPTIONS:
        if isinstance(value, bool):
            raise InvalidOptionError(f"Option '{name}' expects an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidOptionError(f"Option '{name}' expects an integer, got {value!r}") from exc
    return str(value)


class FileType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


@dataclass(frozen=True)
class PageRange:
    start: int = 1
    end: int = 1

    @property
    def page_count(self) -> int:
        return self.end - self.start + 1

    @property
    def is_single_page(self) -> bool:
        return self.page_count == 1

    def as_unoconv(self) -> str:
        if self.start == 1 and self.end == 1:
            return "1"
        return f"{self.start}-{self.end}"


def parse_page_range(value: Optional[str]) -> PageRange:
    """Parse ``start-end`` into a PageRange.

    Anything that is not two positive integers in ascending order falls back
    to the first page only.
    """
    if not value:
        return PageRange()
    match = _PAGE_RANGE_RE.match(value)
    if not match:
        logger.warning("Ignoring malformed page range %r; rendering first page only", value)
        return PageRange()
    start, end = int(match.group(1)), int(match.group(2))
    if start < 1 or end < start:
        logger.warning("Ignoring page range %r; rendering first page only", value)
        return PageRange()
    return PageRange(start=start, end=end)


@dataclass(frozen=True)
class PreviewOptions:
    width: Optional[int] = None
    height: Optional[int] = None
    force_aspect: bool = False
    quality: Optional[int] = None
    background: Optional[str] = None
    colorspace: Optional[str] = None
    density: Optional[int] = None
    autorotate: bool = False
    trim: bool = False
    pagerange: Optional[str] = None

    @property
    def has_size(self) -> bool:
        return bool(self.width and self.height and self.width > 0 and self.height > 0)

    @property
    def page_range(self) -> PageRange:
        return parse_page_range(self.pagerange)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PreviewOptions":
        known = {field.name for field in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                logger.debug("Ignoring unknown preview option %r", key)
                continue
            if value is None:
                continue
            kwargs[name] = _convert_option(name, value)
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Union["PreviewOptions", Mapping[str, Any], None]) -> "PreviewOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.from_mapping(options)


@dataclass(frozen=True)
class PreviewRequest:
    source: str
    output: Path
    options: PreviewOptions = PreviewOptions()


@dataclass(frozen=True)
class CommandResult:
    command: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class PreviewResult:
    source: str
    file_type: FileType
    outputs: Tuple[Path, ...]
