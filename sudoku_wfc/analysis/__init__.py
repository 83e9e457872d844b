"""Search trace recording and charts."""

from .trace import SearchTrace, TraceStep

__all__ = ["SearchTrace", "TraceStep"]
