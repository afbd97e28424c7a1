"""Runtime settings, read from the environment once at startup."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from fruitmail.dispatch import DEFAULT_OSASCRIPT_TIMEOUT


@dataclass(frozen=True)
class Settings:
    mail_db: Optional[str] = None
    osascript_timeout: Optional[float] = DEFAULT_OSASCRIPT_TIMEOUT
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build Settings from environment variables.

        MAIL_DB overrides the envelope index location.
        FRUITMAIL_OSASCRIPT_TIMEOUT is in seconds; 0 disables the timeout.
        FRUITMAIL_LOG_LEVEL is a logging level name.
        """
        raw_timeout = os.environ.get("FRUITMAIL_OSASCRIPT_TIMEOUT", "").strip()
        if not raw_timeout:
            timeout: Optional[float] = DEFAULT_OSASCRIPT_TIMEOUT
        else:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"FRUITMAIL_OSASCRIPT_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                timeout = None

        log_level = os.environ.get("FRUITMAIL_LOG_LEVEL", "").strip().upper() or "WARNING"
        if log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"FRUITMAIL_LOG_LEVEL must be a logging level name, got {log_level!r}")

        return cls(
            mail_db=os.environ.get("MAIL_DB", "").strip() or None,
            osascript_timeout=timeout,
            log_level=log_level,
        )
