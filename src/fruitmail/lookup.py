"""
Evidence normalization.

Callers hand over whatever identifying evidence they have for a message
(row ids from the envelope index, Message-ID headers, mailbox names, a
subject, a sender). This module turns that loose evidence into a
``LookupContext`` the script builder can rely on:

- strings are trimmed and empty ones dropped
- duplicates are removed, keeping first-seen order
- row ids are coerced to positive integers; anything else is dropped
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class LookupContext:
    """Normalized evidence for a single resolution attempt."""

    numeric_id_candidates: Tuple[int, ...] = ()
    message_id_candidates: Tuple[str, ...] = ()
    mailbox_hints: Tuple[str, ...] = ()
    subject: str = ""
    sender: str = ""

    @property
    def has_evidence(self) -> bool:
        """True when at least one resolution tier has something to match."""
        return bool(self.numeric_id_candidates or self.message_id_candidates or self.subject)


def _coerce_row_id(value: Any) -> Optional[int]:
    # bool is an int subclass; True must not become row 1
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _DIGITS.fullmatch(text):
            return None
        number = int(text)
    else:
        return None
    return number if number > 0 else None


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _unique(values: Iterable[Any]) -> Tuple[Any, ...]:
    return tuple(dict.fromkeys(values))


def normalize_lookup(
    numeric_id_candidates: Optional[Iterable[Any]] = None,
    message_id_candidates: Optional[Iterable[Any]] = None,
    mailbox_hints: Optional[Iterable[Any]] = None,
    subject: Optional[str] = None,
    sender: Optional[str] = None,
) -> LookupContext:
    """
    Build a LookupContext from raw caller evidence.

    Invalid entries are dropped silently. A context with no usable
    evidence is legal; it simply resolves to not-found.

    Args:
        numeric_id_candidates: Row identifiers (ints or digit strings)
        message_id_candidates: Message-ID header values, with or without angle brackets
        mailbox_hints: Substrings of mailbox names to search first
        subject: Subject line to match when no identifier resolves
        sender: Sender address used to tighten subject matching

    Returns:
        A normalized, immutable LookupContext
    """
    row_ids = []
    for value in numeric_id_candidates or ():
        row_id = _coerce_row_id(value)
        if row_id is None:
            logger.debug(f"Dropping invalid row id candidate: {value!r}")
            continue
        row_ids.append(row_id)

    message_ids = [_clean_text(v) for v in message_id_candidates or ()]
    hints = [_clean_text(v) for v in mailbox_hints or ()]

    return LookupContext(
        numeric_id_candidates=_unique(row_ids),
        message_id_candidates=_unique(v for v in message_ids if v),
        mailbox_hints=_unique(v for v in hints if v),
        subject=_clean_text(subject),
        sender=_clean_text(sender),
    )


def normalize_context(context: LookupContext) -> LookupContext:
    """Re-normalize an existing context. Idempotent."""
    return normalize_lookup(
        numeric_id_candidates=context.numeric_id_candidates,
        message_id_candidates=context.message_id_candidates,
        mailbox_hints=context.mailbox_hints,
        subject=context.subject,
        sender=context.sender,
    )
