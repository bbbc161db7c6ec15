from __future__ import annotations

from .builder import build_chain, build_dispatcher, split_loop
from .control import disable_point_recovery, terminate
from .recovery import CursorRecoveryService
from .session import ChainDispatcher, SequencerContext, Session, default_context

__all__ = [
    "ChainDispatcher",
    "CursorRecoveryService",
    "SequencerContext",
    "Session",
    "build_chain",
    "build_dispatcher",
    "default_context",
    "disable_point_recovery",
    "split_loop",
    "terminate",
]
