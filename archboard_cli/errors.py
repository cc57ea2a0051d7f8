"""Exception hierarchy for ArchBoard runs.

Scanning failures abort before any remote call; remote failures abort the
current run and leave whatever was already created on the board.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ArchboardError(Exception):
    """Base exception for all ArchBoard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DirectoryNotFoundError(ArchboardError):
    """Source directory (or a file in it) is missing or unreadable."""

    def __init__(self, path: str, reason: str = "") -> None:
        details = {"path": path}
        if reason:
            details["reason"] = reason
        super().__init__(f"Source directory not found or unreadable: {path}", details)
        self.path = path


class RemoteError(ArchboardError):
    """Base class for whiteboard service failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class RemoteUnavailableError(RemoteError):
    """Transport failure reaching the whiteboard service."""


class RemoteRejectedError(RemoteError):
    """The whiteboard service rejected a command's payload."""
