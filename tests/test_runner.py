"""Tests for CommandRunner against real processes."""

from __future__ import annotations

import sys
from unittest.mock import AsyncMock, patch

import pytest

from filepreview.config import Settings
from filepreview.preview.exceptions import VideoConversionError
from filepreview.preview.runner import CommandRunner
from filepreview.preview.storage import PreviewStorage
from filepreview.services.preview_generator import PreviewGeneratorService


@pytest.mark.asyncio
async def test_captures_stdout_and_exit_code():
    result = await CommandRunner().run([sys.executable, "-c", "print('hello')"])
    assert result.ok
    assert result.stdout.strip() == "hello"
    assert result.command[0] == sys.executable


@pytest.mark.asyncio
async def test_non_zero_exit_keeps_stderr():
    script = "import sys; sys.stderr.write('bad input\\n'); sys.exit(3)"
    result = await CommandRunner().run([sys.executable, "-c", script])
    assert not result.ok
    assert result.returncode == 3
    assert result.stderr == "bad input"


@pytest.mark.asyncio
async def test_missing_program_reports_not_found():
    result = await CommandRunner().run(["filepreview-no-such-tool", "--version"])
    assert result.returncode == 127
    assert "not found" in result.stderr


@pytest.mark.asyncio
async def test_non_executable_program_reports_failure(tmp_path):
    tool = tmp_path / "ffmpeg-not-exec"
    tool.write_text("not a program")
    tool.chmod(0o644)

    result = await CommandRunner().run([str(tool), "-version"])

    assert result.returncode == 126
    assert "cannot execute" in result.stderr


@pytest.mark.asyncio
async def test_non_executable_tool_surfaces_as_conversion_error(tmp_path):
    tool = tmp_path / "ffmpeg-not-exec"
    tool.write_text("not a program")
    tool.chmod(0o644)
    source = tmp_path / "a.mp4"
    source.write_bytes(b"video")
    settings = Settings(
        file_command_path=sys.executable,
        ffmpeg_path=str(tool),
        temp_directory=tmp_path / "tmp",
        media_directory=tmp_path / "media",
    )
    service = PreviewGeneratorService(storage=PreviewStorage(settings.temp_directory), settings=settings)

    with patch.object(PreviewGeneratorService, "_reject_executable", new=AsyncMock()):
        with pytest.raises(VideoConversionError) as exc_info:
            await service.generate(source, tmp_path / "out.png")

    assert exc_info.value.returncode == 126
