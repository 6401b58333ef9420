"""Shared fixtures: a recording stand-in for the external tools."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import pytest

from filepreview.config import Settings
from filepreview.preview.storage import PreviewStorage
from filepreview.preview.types import CommandResult
from filepreview.services.preview_generator import PreviewGeneratorService


class FakeRunner:
    """Records every command and imitates file/curl/ffmpeg/convert/unoconv.

    Successful tool runs create the file they would have written, so tests
    can assert on outputs and on temp-file cleanup.
    """

    def __init__(self) -> None:
        self.commands: List[Tuple[str, ...]] = []
        self.file_description = "ASCII text"
        self._failures: List[Callable[[Tuple[str, ...]], bool]] = []

    def fail_when(self, predicate: Callable[[Tuple[str, ...]], bool]) -> None:
        self._failures.append(predicate)

    def tools(self) -> List[str]:
        return [command[0] for command in self.commands]

    def by_tool(self, tool: str) -> List[Tuple[str, ...]]:
        return [command for command in self.commands if command[0] == tool]

    async def run(self, command: Sequence[str]) -> CommandResult:
        args = tuple(str(part) for part in command)
        self.commands.append(args)
        if any(predicate(args) for predicate in self._failures):
            return CommandResult(command=args, returncode=1, stderr="boom")

        tool = args[0]
        if tool == "file":
            return CommandResult(command=args, returncode=0, stdout=f"{Path(args[1]).name}: {self.file_description}\n")
        if tool in ("curl", "unoconv"):
            target = Path(args[args.index("-o") + 1])
            target.write_bytes(b"payload")
        elif tool in ("ffmpeg", "convert"):
            Path(args[-1]).write_bytes(b"image")
        return CommandResult(command=args, returncode=0)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        file_command_path="file",
        curl_path="curl",
        ffmpeg_path="ffmpeg",
        convert_path="convert",
        unoconv_path="unoconv",
        temp_directory=tmp_path / "tmp",
        media_directory=tmp_path / "media",
        pdf_density=300,
        pdf_colorspace="rgb",
    )


@pytest.fixture
def storage(settings):
    return PreviewStorage(settings.temp_directory, settings.media_directory / "outputs")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def service(storage, settings, runner):
    return PreviewGeneratorService(storage=storage, settings=settings, runner=runner)


@pytest.fixture
def make_source(tmp_path):
    """Create a local input file with the given name."""

    def _make(name: str, content: bytes = b"data") -> Path:
        path = tmp_path / "inputs" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make
