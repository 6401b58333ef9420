from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

from .exceptions import CleanupError
from .mime import source_filename

logger = logging.getLogger(__name__)


class PreviewStorage:
    def __init__(self, tmp_dir: Path, output_dir: Optional[Path] = None) -> None:
        self._tmp_dir = tmp_dir
        self._output_dir = output_dir
        self._tmp_dir.mkdir(parents=True, exist_ok=True)
        if self._output_dir is not None:
            self._output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def tmp_dir(self) -> Path:
        return self._tmp_dir

    @property
    def output_dir(self) -> Path:
        if self._output_dir is None:
            raise RuntimeError("PreviewStorage was created without an output directory")
        return self._output_dir

    def build_temp_path(self, suffix: str) -> Path:
        if not suffix.startswith('.'):
            suffix = f'.{suffix}' if suffix else ''
        return self._tmp_dir / f"{uuid.uuid4().hex}{suffix}"

    def build_download_path(self, url: str) -> Path:
        return self._tmp_dir / f"{uuid.uuid4().hex}{source_filename(url)}"

    def build_output_path(self, extension: str) -> Path:
        return self.output_dir / f"{uuid.uuid4().hex}.{extension.lstrip('.')}"

    def resolve_output(self, name: str) -> Optional[Path]:
        candidate = (self.output_dir / name).resolve()
        try:
            candidate.relative_to(self.output_dir.resolve())
        except ValueError:
            return None
        if not candidate.is_file():
            return None
        return candidate

    @staticmethod
    def page_output_path(output: Path, index: int) -> Path:
        return output.with_name(f"{index}_{output.name}")

    @staticmethod
    def cleanup(path: Path) -> None:
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as exc:
            raise CleanupError(f"Failed to remove temporary file '{path}': {exc}") from exc
        logger.debug("Removed temporary file %s", path)
