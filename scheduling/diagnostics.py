"""
Purpose: The diagnostics collaborator the heap reports to.
What it does:
- Defines the one-method Diagnostics interface: emit(message, origin)
- Ships a no-op sink (default), a logging sink, and an in-memory sink

Rule: Diagnostics are fire-and-forget. Nothing here may change heap behaviour.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple


class Diagnostics(Protocol):
    def emit(self, message: str, origin: str) -> None:
        ...


class NullDiagnostics:
    """Drops every message."""

    def emit(self, message: str, origin: str) -> None:
        return None


class LoggingDiagnostics:
    """
    Forwards messages to a standard logger as "[ORIGIN] message".
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("scheduling.heap")
        self.level = level

    def emit(self, message: str, origin: str) -> None:
        self.logger.log(self.level, "[%s] %s", origin.upper(), message)


@dataclass
class CollectingDiagnostics:
    """
    Keeps every (origin, message) pair in memory, in the order received.
    """
    records: List[Tuple[str, str]] = field(default_factory=list)

    def emit(self, message: str, origin: str) -> None:
        self.records.append((origin, message))

    def messages(self, origin: Optional[str] = None) -> List[str]:
        return [msg for org, msg in self.records if origin is None or org == origin]

    def clear(self) -> None:
        self.records.clear()
