from __future__ import annotations

import logging

from .session import SequencerContext, default_context


logger = logging.getLogger(__name__)


def terminate(context: SequencerContext | None = None) -> None:
    """End the active chain; its next invocation starts over.

    Meant to be called from inside an insert or cleanup function.
    """

    context = context or default_context
    if context.active is None:
        logger.debug("terminate called with no active chain")
        return
    context.active.terminated = True


def disable_point_recovery(context: SequencerContext | None = None) -> None:
    """Stop restoring the cursor between steps, for good."""

    (context or default_context).recovery.disable()
