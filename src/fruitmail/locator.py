"""Locating Mail's envelope index database."""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from fruitmail.errors import MailDatabaseAccessError, MailDatabaseNotFoundError

logger = logging.getLogger(__name__)

_VERSION_DIR = re.compile(r"^V(\d+)$")


def default_mail_root() -> Path:
    return Path.home() / "Library" / "Mail"


def find_db_path(
    override: Optional[Union[str, Path]] = None,
    mail_root: Optional[Path] = None,
) -> Path:
    """
    Find the Mail envelope index.

    Looks for ``V<n>`` folders under the Mail data root, newest version
    first, and returns the first one holding ``MailData/Envelope Index``.

    Args:
        override: Explicit database path; returned as-is when set
        mail_root: Mail data root (default: ~/Library/Mail)

    Returns:
        Path to the envelope index

    Raises:
        MailDatabaseAccessError: the Mail folder is not readable
        MailDatabaseNotFoundError: no envelope index was found
    """
    if override:
        return Path(override)

    root = mail_root if mail_root is not None else default_mail_root()

    try:
        entries = list(root.iterdir())
    except PermissionError:
        raise MailDatabaseAccessError(
            f"Permission denied accessing {root}. Please grant Terminal 'Full Disk Access' in System Settings."
        )
    except OSError as e:
        logger.debug(f"Cannot list {root}: {e}")
        entries = []

    versions = []
    for entry in entries:
        match = _VERSION_DIR.match(entry.name)
        if match and entry.is_dir():
            versions.append((int(match.group(1)), entry))

    # V10 before V9
    for _, version_dir in sorted(versions, key=lambda item: item[0], reverse=True):
        db_path = version_dir / "MailData" / "Envelope Index"
        if db_path.exists():
            logger.debug(f"Using Mail database at {db_path}")
            return db_path

    raise MailDatabaseNotFoundError(
        f"Could not find Mail database in {root}. Ensure you have 'Full Disk Access' enabled."
    )
