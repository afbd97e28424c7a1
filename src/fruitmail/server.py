#!/usr/bin/env python3
"""
Fruitmail MCP Server - FastMCP implementation
Provides tools to read and open individual Apple Mail messages
"""

import functools
import logging
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from fruitmail import actions
from fruitmail.config import Settings
from fruitmail.dispatch import Runner, run_applescript
from fruitmail.errors import FruitmailError
from fruitmail.locator import find_db_path
from fruitmail.lookup import normalize_lookup

# Configure logging
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("Fruitmail")

_settings: Optional[Settings] = None


def configure(settings: Settings) -> None:
    """Install the settings the tools run with."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    if _settings is None:
        configure(Settings.from_env())
    return _settings


def get_runner() -> Runner:
    """osascript runner bound to the configured timeout."""
    return functools.partial(run_applescript, timeout=get_settings().osascript_timeout)


@mcp.tool()
async def get_email_body(message_id: str) -> str:
    """
    Get the full content of an email by its Mail row id.

    Args:
        message_id: Numeric row id of the message (digits only)

    Returns:
        The message content, or an error description
    """
    try:
        return await actions.get_email_body(message_id, runner=get_runner())
    except FruitmailError as e:
        return f"Error: {e}"


@mcp.tool()
async def open_email(document_id: str) -> str:
    """
    Open an email in Mail by its Message-ID header and bring Mail to the front.

    Args:
        document_id: Message-ID, with or without angle brackets (e.g., "<abc@example.com>")

    Returns:
        Confirmation message or an error description
    """
    try:
        await actions.open_email(document_id, runner=get_runner())
    except FruitmailError as e:
        return f"Error: {e}"
    return f"Opened message {document_id}"


@mcp.tool()
async def open_email_by_row_id(message_id: str) -> str:
    """
    Open an email in Mail by its row id and bring Mail to the front.

    Args:
        message_id: Numeric row id of the message (digits only)

    Returns:
        Confirmation message or an error description
    """
    try:
        await actions.open_email_by_row_id(message_id, runner=get_runner())
    except FruitmailError as e:
        return f"Error: {e}"
    return f"Opened message {message_id}"


@mcp.tool()
async def get_email_body_by_lookup(
    message_ids: Optional[List[str]] = None,
    row_ids: Optional[List[int]] = None,
    mailboxes: Optional[List[str]] = None,
    subject: Optional[str] = None,
    sender: Optional[str] = None
) -> str:
    """
    Find an email from whatever identifying details are known and return its content.

    Tries Message-ID first, then row id, then subject/sender matching.

    Args:
        message_ids: Candidate Message-ID header values
        row_ids: Candidate Mail row ids
        mailboxes: Mailbox names (or parts of names) to search first
        subject: Subject line of the message
        sender: Sender address, used to narrow subject matches

    Returns:
        The message content, or an error description
    """
    context = normalize_lookup(
        numeric_id_candidates=row_ids,
        message_id_candidates=message_ids,
        mailbox_hints=mailboxes,
        subject=subject,
        sender=sender,
    )
    try:
        return await actions.get_email_body_by_lookup(context, runner=get_runner())
    except FruitmailError as e:
        return f"Error: {e}"


@mcp.tool()
async def open_email_by_lookup(
    message_ids: Optional[List[str]] = None,
    row_ids: Optional[List[int]] = None,
    mailboxes: Optional[List[str]] = None,
    subject: Optional[str] = None,
    sender: Optional[str] = None
) -> str:
    """
    Find an email from whatever identifying details are known and open it in Mail.

    Args:
        message_ids: Candidate Message-ID header values
        row_ids: Candidate Mail row ids
        mailboxes: Mailbox names (or parts of names) to search first
        subject: Subject line of the message
        sender: Sender address, used to narrow subject matches

    Returns:
        Confirmation message or an error description
    """
    context = normalize_lookup(
        numeric_id_candidates=row_ids,
        message_id_candidates=message_ids,
        mailbox_hints=mailboxes,
        subject=subject,
        sender=sender,
    )
    try:
        await actions.open_email_by_lookup(context, runner=get_runner())
    except FruitmailError as e:
        return f"Error: {e}"
    return "Opened message"


@mcp.tool()
async def locate_mail_database() -> str:
    """
    Show where the Mail envelope index database lives.

    Returns:
        Path to the database, or an error description
    """
    try:
        return str(find_db_path(override=get_settings().mail_db))
    except FruitmailError as e:
        return f"Error: {e}"
