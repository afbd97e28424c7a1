"""
Message actions for CLI callers.

``get_email_body``, ``open_email`` and ``open_email_by_row_id`` keep the
narrow single-identifier contract older callers rely on: they validate
the identifier, build a one-candidate lookup, and run it through the
dispatcher. The ``*_by_lookup`` variants take a full LookupContext and
run the whole resolution ladder.
"""

import logging
import re

from fruitmail.dispatch import Runner, dispatch, run_applescript
from fruitmail.errors import DispatchError, InvalidIdentifierError
from fruitmail.lookup import LookupContext, normalize_lookup
from fruitmail.scripts import ActionMode

logger = logging.getLogger(__name__)

# Strictly numeric; anything else never reaches AppleScript
_ROW_ID = re.compile(r"\d+", re.ASCII)

BODY_FAILURE = "Failed to fetch message body via AppleScript"
OPEN_FAILURE = "Failed to open message via AppleScript"


def _validate_row_id(row_id: str) -> int:
    if not isinstance(row_id, str) or not _ROW_ID.fullmatch(row_id):
        raise InvalidIdentifierError("Invalid message ID")
    return int(row_id)


def strip_angle_brackets(document_id: str) -> str:
    """Remove one pair of enclosing angle brackets, only if present at both ends."""
    if len(document_id) >= 2 and document_id.startswith("<") and document_id.endswith(">"):
        return document_id[1:-1]
    return document_id


async def _run(context: LookupContext, mode: ActionMode, failure: str, runner: Runner) -> str:
    try:
        found = await dispatch(context, mode, runner)
    except DispatchError as e:
        raise DispatchError(failure) from e
    return found.text


async def get_email_body_by_lookup(context: LookupContext, runner: Runner = run_applescript) -> str:
    """Return the content of the first message the lookup resolves to."""
    return await _run(context, ActionMode.BODY, BODY_FAILURE, runner)


async def open_email_by_lookup(context: LookupContext, runner: Runner = run_applescript) -> None:
    """Open and focus the first message the lookup resolves to."""
    await _run(context, ActionMode.OPEN, OPEN_FAILURE, runner)


async def get_email_body(row_id: str, runner: Runner = run_applescript) -> str:
    """
    Fetch the body of a message by its Mail row id.

    Args:
        row_id: Row identifier as a string of digits

    Returns:
        The message content

    Raises:
        InvalidIdentifierError: row_id is not all digits
        MessageNotFoundError: no message has that row id
        AppleScriptRuntimeError: Mail reported an error
        DispatchError: osascript could not be run
    """
    context = normalize_lookup(numeric_id_candidates=[_validate_row_id(row_id)])
    return await _run(context, ActionMode.BODY, BODY_FAILURE, runner)


async def open_email(document_id: str, runner: Runner = run_applescript) -> None:
    """
    Open a message in Mail by its Message-ID header.

    Args:
        document_id: Message-ID, with or without enclosing angle brackets
    """
    if not document_id:
        raise InvalidIdentifierError("Invalid document ID")
    context = normalize_lookup(message_id_candidates=[strip_angle_brackets(document_id.strip())])
    logger.debug(f"Opening message by Message-ID {context.message_id_candidates}")
    await _run(context, ActionMode.OPEN, OPEN_FAILURE, runner)


async def open_email_by_row_id(row_id: str, runner: Runner = run_applescript) -> None:
    """Open a message in Mail by its row id."""
    context = normalize_lookup(numeric_id_candidates=[_validate_row_id(row_id)])
    await _run(context, ActionMode.OPEN, OPEN_FAILURE, runner)
