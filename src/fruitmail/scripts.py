"""
AppleScript generation for message lookup.

``build_lookup_script`` turns a LookupContext and an ActionMode into one
self-contained script for Mail. The script walks a fixed resolution
ladder and stops at the first tier that finds a message:

1. narrow the mailbox scope using mailbox hints (falls back to all mailboxes)
2. Message-ID header match, verbatim and then wrapped in angle brackets
3. row id match
4. subject/sender heuristics, strictest first

Every piece of caller evidence reaches the script through
``fruitmail.escaping``; the rest of the text is a static template.
"""

import enum
import logging
from typing import List, Tuple

from fruitmail.escaping import (
    AppleScriptLiteral,
    integer_list_literal,
    string_list_literal,
    string_literal,
)
from fruitmail.lookup import LookupContext

logger = logging.getLogger(__name__)

# Reserved outputs. Chosen so they cannot plausibly be a message body.
NOT_FOUND_SENTINEL = "__FRUITMAIL_NOT_FOUND__"
SCRIPT_ERROR_PREFIX = "__FRUITMAIL_SCRIPT_ERROR__:"
OPENED_TOKEN = "__FRUITMAIL_OPENED__"


class ActionMode(enum.Enum):
    """What to do with the resolved message."""

    BODY = "body"
    OPEN = "open"


def _slot(value: AppleScriptLiteral) -> str:
    """Render an evidence slot. Only escaped literals are accepted."""
    if not isinstance(value, AppleScriptLiteral):
        raise TypeError(f"Evidence slots take AppleScriptLiteral, got {type(value).__name__}")
    return value.text


def get_mailbox_scope_snippet(hints: AppleScriptLiteral) -> str:
    """
    Returns AppleScript that sets ``searchBoxes`` to the mailboxes to search.

    Collects every mailbox of every account plus the local top-level
    mailboxes. When hints are given, keeps mailboxes whose name contains a
    hint or is contained by one; if nothing matches, the full set is kept.

    Args:
        hints: List literal of mailbox name hints (may be empty)
    """
    return f'''-- Mailbox scope
set allBoxes to {{}}
repeat with accountRef in every account
    try
        set allBoxes to allBoxes & (every mailbox of accountRef)
    end try
end repeat
try
    set allBoxes to allBoxes & (every mailbox)
end try
set mailboxHints to {_slot(hints)}
set searchBoxes to {{}}
if (count of mailboxHints) > 0 then
    repeat with boxRef in allBoxes
        try
            set boxName to name of boxRef
            repeat with hintRef in mailboxHints
                set hintText to contents of hintRef
                if boxName contains hintText or hintText contains boxName then
                    set end of searchBoxes to contents of boxRef
                    exit repeat
                end if
            end repeat
        end try
    end repeat
end if
if (count of searchBoxes) = 0 then
    set searchBoxes to allBoxes
end if'''


class ResolutionStrategy:
    """One tier of the resolution ladder.

    A strategy renders a block that runs only while ``foundMsg`` is still
    missing value, and sets ``foundMsg`` when it finds a message.
    """

    name = "strategy"

    def applies(self, context: LookupContext) -> bool:
        raise NotImplementedError

    def render(self, context: LookupContext) -> str:
        raise NotImplementedError


class MessageIdStrategy(ResolutionStrategy):
    """Exact Message-ID header match, bare value first, then ``<value>``."""

    name = "message-id"

    def applies(self, context: LookupContext) -> bool:
        return bool(context.message_id_candidates)

    def render(self, context: LookupContext) -> str:
        candidates = string_list_literal(context.message_id_candidates)
        return f'''-- Message-ID match
if foundMsg is missing value then
    repeat with candidateRef in {_slot(candidates)}
        set candidateId to contents of candidateRef
        repeat with boxRef in searchBoxes
            try
                set foundMsg to first message of boxRef whose message id is candidateId
            end try
            if foundMsg is missing value then
                try
                    set foundMsg to first message of boxRef whose message id is ("<" & candidateId & ">")
                end try
            end if
            if foundMsg is not missing value then exit repeat
        end repeat
        if foundMsg is not missing value then exit repeat
    end repeat
end if'''


class RowIdStrategy(ResolutionStrategy):
    """Match on Mail's local row id."""

    name = "row-id"

    def applies(self, context: LookupContext) -> bool:
        return bool(context.numeric_id_candidates)

    def render(self, context: LookupContext) -> str:
        candidates = integer_list_literal(context.numeric_id_candidates)
        return f'''-- Row id match
if foundMsg is missing value then
    repeat with rowRef in {_slot(candidates)}
        set candidateRowId to contents of rowRef
        repeat with boxRef in searchBoxes
            try
                set foundMsg to first message of boxRef whose id is candidateRowId
            end try
            if foundMsg is not missing value then exit repeat
        end repeat
        if foundMsg is not missing value then exit repeat
    end repeat
end if'''


# (criterion, needs sender), strictest first
SUBJECT_CRITERIA: Tuple[Tuple[str, bool], ...] = (
    ("subject is targetSubject and sender contains targetSender", True),
    ("subject is targetSubject", False),
    ("subject contains targetSubject and sender contains targetSender", True),
    ("subject contains targetSubject", False),
)


class SubjectSenderStrategy(ResolutionStrategy):
    """Heuristic subject/sender match.

    Each criterion is tried across every mailbox in scope before the next,
    looser one. Sender-aware criteria are only emitted when a sender is
    known. Matching uses Mail's own string comparison.
    """

    name = "subject-sender"

    def applies(self, context: LookupContext) -> bool:
        return bool(context.subject)

    def criteria(self, context: LookupContext) -> List[str]:
        return [
            criterion for criterion, needs_sender in SUBJECT_CRITERIA
            if context.sender or not needs_sender
        ]

    def render(self, context: LookupContext) -> str:
        lines = [
            "-- Subject/sender match",
            f"set targetSubject to {_slot(string_literal(context.subject))}",
            f"set targetSender to {_slot(string_literal(context.sender))}",
        ]
        for criterion in self.criteria(context):
            lines.append(f'''if foundMsg is missing value then
    repeat with boxRef in searchBoxes
        try
            set foundMsg to first message of boxRef whose {criterion}
        end try
        if foundMsg is not missing value then exit repeat
    end repeat
end if''')
        return "\n".join(lines)


RESOLUTION_LADDER: Tuple[ResolutionStrategy, ...] = (
    MessageIdStrategy(),
    RowIdStrategy(),
    SubjectSenderStrategy(),
)


def get_action_snippet(mode: ActionMode) -> str:
    """Returns AppleScript that acts on ``foundMsg`` for the given mode."""
    if mode is ActionMode.BODY:
        return "return content of foundMsg"
    if mode is ActionMode.OPEN:
        return f'''open foundMsg
activate
return {_slot(string_literal(OPENED_TOKEN))}'''
    raise ValueError(f"Unsupported action mode: {mode!r}")


def build_lookup_script(context: LookupContext, mode: ActionMode) -> str:
    """
    Build the AppleScript that resolves one message and acts on it.

    Args:
        context: Normalized lookup evidence
        mode: ActionMode.BODY to return the content, ActionMode.OPEN to open it in Mail

    Returns:
        Script text that prints exactly one meaningful line: the body, the
        opened token, the not-found sentinel, or the script-error prefix
        followed by ``<code>:<message>``
    """
    strategies = [s for s in RESOLUTION_LADDER if s.applies(context)]
    tiers = "\n\n".join(s.render(context) for s in strategies)
    logger.debug(f"Building {mode.value} script with tiers: {[s.name for s in strategies]}")

    body = "\n\n".join(
        block for block in (
            get_mailbox_scope_snippet(string_list_literal(context.mailbox_hints)),
            "set foundMsg to missing value",
            tiers,
            f'''if foundMsg is missing value then
    return {_slot(string_literal(NOT_FOUND_SENTINEL))}
end if''',
            get_action_snippet(mode),
        ) if block
    )

    # body carries rendered literals and is emitted verbatim
    return f'''tell application "Mail"
    try

{body}

    on error errMsg number errNum
        return {_slot(string_literal(SCRIPT_ERROR_PREFIX))} & errNum & ":" & errMsg
    end try
end tell
'''
