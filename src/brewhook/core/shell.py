"""Asynchronous brew command execution with output capture and JSON parsing."""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Optional

from brewhook.core.config import capture_env
from brewhook.core.errors import BrewCommandError, BrewTimeoutError
from brewhook.core.logging import get_logger

log = get_logger(__name__)


async def _spawn(*cmd: str, **kwargs: Any) -> asyncio.subprocess.Process:
    try:
        return await asyncio.create_subprocess_exec(*cmd, **kwargs)
    except OSError as e:
        log.error("command_spawn_failed", command=" ".join(cmd), error=str(e))
        raise BrewCommandError(
            "Failed to start brew command",
            command=" ".join(cmd),
            error=str(e),
        ) from e


async def run_capture(
    *cmd: str, timeout: Optional[float] = None
) -> tuple[str, str, int]:
    """Run a command asynchronously and capture its output.

    Output that is not valid UTF-8 is decoded with replacement characters.

    Args:
        *cmd: Command and its arguments to run.
        timeout: Timeout in seconds, or None to wait indefinitely. brewhook
            itself never sets one; it is there for callers that need a bound.

    Returns:
        A tuple of (stdout, stderr, returncode).

    Raises:
        BrewCommandError: If the command cannot be started.
        BrewTimeoutError: If the command times out.
    """
    start = time.perf_counter()
    log.debug("command_start", command=" ".join(cmd), timeout=timeout)

    process = await _spawn(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=capture_env(),
    )

    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        log.error(
            "command_timeout",
            command=" ".join(cmd),
            timeout=timeout,
            duration_ms=duration_ms
        )
        try:
            process.kill()
            await process.wait()
        finally:
            raise BrewTimeoutError(
                command=" ".join(cmd),
                timeout=timeout,
                context={"duration_ms": duration_ms}
            ) from e

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "command_complete",
        command=" ".join(cmd),
        returncode=process.returncode,
        duration_ms=duration_ms
    )

    return (
        out.decode(errors="replace").strip(),
        err.decode(errors="replace").strip(),
        process.returncode,
    )


async def run_interactive(*cmd: str) -> int:
    """Run a command with the caller's stdin, stdout and stderr.

    Used for installs and maintenance commands whose progress the user
    should see. The exit status is the only result.

    Args:
        *cmd: Command and its arguments to run.

    Returns:
        The process exit status.

    Raises:
        BrewCommandError: If the command cannot be started.
    """
    start = time.perf_counter()
    log.debug("command_start", command=" ".join(cmd), interactive=True)

    process = await _spawn(*cmd)
    returncode = await process.wait()

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "command_complete",
        command=" ".join(cmd),
        returncode=returncode,
        duration_ms=duration_ms
    )

    return returncode


async def run_json(*cmd: str, timeout: Optional[float] = None) -> Any:
    """Run a command and parse its JSON output.

    Args:
        *cmd: Command and its arguments to run.
        timeout: Timeout in seconds.

    Returns:
        Parsed JSON output.

    Raises:
        BrewCommandError: If the command fails or JSON parsing fails.
        BrewTimeoutError: If the command times out.
    """
    out, err, code = await run_capture(*cmd, timeout=timeout)

    if code != 0:
        log.error(
            "command_failed",
            command=" ".join(cmd),
            error=err or out,
            returncode=code
        )
        raise BrewCommandError(
            command=" ".join(cmd),
            returncode=code,
            error=err or out,
        )

    try:
        return json.loads(out)
    except json.JSONDecodeError as e:
        log.error(
            "json_parse_failed",
            command=" ".join(cmd),
            error=str(e),
        )
        raise BrewCommandError(
            "Failed to parse JSON output",
            command=" ".join(cmd),
            error=str(e),
            context={"output_preview": out[:200] if out else ""}
        ) from e


async def run_lines(*cmd: str, timeout: Optional[float] = None) -> list[str]:
    """Run a command and return its non-blank output lines.

    Raises:
        BrewCommandError: If the command exits non-zero.
        BrewTimeoutError: If the command times out.
    """
    out, err, code = await run_capture(*cmd, timeout=timeout)

    if code != 0:
        log.warning(
            "command_failed",
            command=" ".join(cmd),
            error=err or out,
            returncode=code
        )
        raise BrewCommandError(
            command=" ".join(cmd),
            returncode=code,
            error=err or out,
        )

    return [line.strip() for line in out.splitlines() if line.strip()]
