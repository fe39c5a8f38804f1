"""
Scheduling package: the ride heap and its collaborators.

Public API:
- Engine: MinHeap, HeapState
- Diagnostics: Diagnostics, NullDiagnostics, LoggingDiagnostics, CollectingDiagnostics
- Presentation: HeapPrinter

"""
from .diagnostics import CollectingDiagnostics, Diagnostics, LoggingDiagnostics, NullDiagnostics
from .heap import HeapState, MinHeap
from .printer import HeapPrinter

__all__ = ["MinHeap",
           "HeapState",
           "Diagnostics",
           "NullDiagnostics",
           "LoggingDiagnostics",
           "CollectingDiagnostics",
           "HeapPrinter",
           ]
