"""
Running lookup scripts and classifying what they print.

The osascript runner is a plain text-in/text-out channel. Everything it
returns is classified here into one of the ResolutionOutcome variants, and
every runner failure is re-labelled before it leaves this module.
"""

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from fruitmail.errors import (
    AppleScriptExecutionError,
    AppleScriptRuntimeError,
    DispatchError,
    MessageNotFoundError,
)
from fruitmail.lookup import LookupContext, normalize_context
from fruitmail.scripts import (
    NOT_FOUND_SENTINEL,
    SCRIPT_ERROR_PREFIX,
    ActionMode,
    build_lookup_script,
)

logger = logging.getLogger(__name__)

DEFAULT_OSASCRIPT_TIMEOUT = 120

Runner = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class Found:
    """A message was resolved; ``text`` is its body or the opened token."""

    text: str


@dataclass(frozen=True)
class NotFound:
    """No tier matched a message."""


@dataclass(frozen=True)
class ScriptError:
    """Mail raised an error while the script ran."""

    code: str
    message: str


ResolutionOutcome = Union[Found, NotFound, ScriptError]


async def run_applescript(script: str, timeout: Optional[float] = DEFAULT_OSASCRIPT_TIMEOUT) -> str:
    """Execute AppleScript and return its trimmed output.

    Uses asyncio.to_thread() to run the blocking subprocess call
    in a thread pool, making it non-blocking for the async event loop.

    Each call is a single attempt. Callers that need retries or
    serialization against Mail must add them around this function.

    Raises:
        AppleScriptExecutionError: osascript is missing, timed out, or exited non-zero
    """
    try:
        result = await asyncio.to_thread(
            subprocess.run,
            ['osascript', '-e', script],
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except FileNotFoundError:
        raise AppleScriptExecutionError("osascript not found. This tool requires macOS with AppleScript support.")
    except subprocess.TimeoutExpired:
        raise AppleScriptExecutionError(
            f"AppleScript execution timed out after {timeout}s. Apple Mail may be unresponsive."
        )

    if result.returncode != 0:
        error_msg = result.stderr.strip() if result.stderr else "Unknown AppleScript error"
        raise AppleScriptExecutionError(
            f"AppleScript error (code {result.returncode}): {error_msg}",
            returncode=result.returncode,
        )

    return result.stdout.strip()


def classify_output(output: str) -> ResolutionOutcome:
    """Map raw script output onto a ResolutionOutcome."""
    text = output.strip()
    if text == NOT_FOUND_SENTINEL:
        return NotFound()
    if text.startswith(SCRIPT_ERROR_PREFIX):
        remainder = text[len(SCRIPT_ERROR_PREFIX):]
        code, _, message = remainder.partition(":")
        return ScriptError(code=code, message=message)
    return Found(text=text)


async def resolve(
    context: LookupContext,
    mode: ActionMode,
    runner: Runner = run_applescript,
) -> ResolutionOutcome:
    """
    Build, run and classify a lookup script.

    The context is re-normalized first, so raw contexts are accepted.
    A context with no usable evidence is NotFound without running
    osascript. Negative results come back as outcome values. Only a
    runner failure raises, and only as DispatchError.

    Args:
        context: Lookup evidence, normalized here before use
        mode: Action to perform on the resolved message
        runner: Coroutine function that executes script text and returns its output

    Returns:
        Found, NotFound or ScriptError
    """
    context = normalize_context(context)
    if not context.has_evidence:
        logger.info("Lookup has no usable evidence; skipping osascript")
        return NotFound()

    script = build_lookup_script(context, mode)
    logger.debug(f"Dispatching {mode.value} lookup script ({len(script)} chars)")

    try:
        output = await runner(script)
    except Exception as e:
        # Some hosts report a sentinel return as a failed exit
        if NOT_FOUND_SENTINEL in str(e):
            logger.info("Runner failure carried the not-found sentinel; treating as not found")
            return NotFound()
        logger.warning(f"Failed to run lookup script: {e}")
        raise DispatchError(f"Failed to run AppleScript: {e}") from e

    outcome = classify_output(output)
    logger.info(f"Lookup finished with {type(outcome).__name__}")
    return outcome


async def dispatch(
    context: LookupContext,
    mode: ActionMode,
    runner: Runner = run_applescript,
) -> Found:
    """
    Resolve a message and raise on anything but a match.

    Raises:
        MessageNotFoundError: no tier matched
        AppleScriptRuntimeError: Mail errored while running the script
        DispatchError: the script could not be run
    """
    outcome = await resolve(context, mode, runner)
    if isinstance(outcome, NotFound):
        raise MessageNotFoundError()
    if isinstance(outcome, ScriptError):
        raise AppleScriptRuntimeError(outcome.code, outcome.message)
    return outcome
