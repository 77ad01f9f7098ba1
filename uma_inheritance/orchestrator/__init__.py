"""Session orchestration for incremental inheritance searches."""

from .session import InheritanceSession, SessionFinishedError, SessionStatus, WindowOutcome

__all__ = ["InheritanceSession", "SessionFinishedError", "SessionStatus", "WindowOutcome"]
