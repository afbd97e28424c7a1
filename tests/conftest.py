"""Shared pytest fixtures."""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def runner() -> AsyncMock:
    """Stand-in for the osascript runner; returns an empty string by default."""
    return AsyncMock(return_value="")


@pytest.fixture
def sample_evidence() -> dict:
    """Raw, messy lookup evidence as a CLI caller might pass it."""
    return {
        "numeric_id_candidates": ["12", 12, " 7 ", 0, -3, "abc", True, 4.5, 9.0],
        "message_id_candidates": ["  <abc@example.com> ", "", "abc@example.com", "<abc@example.com>"],
        "mailbox_hints": ["Inbox", " Inbox ", "", "Work"],
        "subject": "  Invoice  ",
        "sender": " billing@example.com ",
    }
