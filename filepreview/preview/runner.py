from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .types import CommandResult

logger = logging.getLogger(__name__)

# Exit statuses a shell reports for missing and non-executable programs.
_COMMAND_NOT_FOUND = 127
_COMMAND_NOT_EXECUTABLE = 126


class CommandRunner:
    """Runs external tools one at a time and captures their output."""

    async def run(self, command: Sequence[str]) -> CommandResult:
        args = tuple(str(part) for part in command)
        logger.debug("Running %s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            return CommandResult(
                command=args,
                returncode=_COMMAND_NOT_FOUND,
                stderr=f"{args[0]}: command not found ({exc})",
            )
        except OSError as exc:
            return CommandResult(
                command=args,
                returncode=_COMMAND_NOT_EXECUTABLE,
                stderr=f"{args[0]}: cannot execute ({exc})",
            )
        stdout, stderr = await process.communicate()
        result = CommandResult(
            command=args,
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace").strip(),
        )
        if not result.ok:
            logger.debug("%s exited with code %s: %s", args[0], result.returncode, result.stderr)
        return result
