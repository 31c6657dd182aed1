"""Transient status line message.

Expiry is checked lazily whenever the message is read; nothing is
scheduled to clear it.
"""

import time
from typing import Optional

from project_launcher.config import DEFAULT_STATUS_DURATION


SEVERITIES = ("information", "warning", "error")


class StatusMessage:
    """Holds the latest status text and when it stops being shown."""

    def __init__(self, duration: float = DEFAULT_STATUS_DURATION) -> None:
        self.duration = duration
        self.text: str = ""
        self.severity: str = "information"
        self.expires_at: float = 0.0

    def show(self, text: str, severity: str = "information", now: Optional[float] = None) -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"unknown severity: {severity}")
        now = time.monotonic() if now is None else now
        self.text = text
        self.severity = severity
        self.expires_at = now + self.duration

    def current(self, now: Optional[float] = None) -> Optional[str]:
        """The message text while it is still fresh, else None."""
        now = time.monotonic() if now is None else now
        if self.text and now < self.expires_at:
            return self.text
        return None

    def clear(self) -> None:
        self.text = ""
        self.expires_at = 0.0
