from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from omni_chain.chain.dsl import run_cleanup
from omni_chain.chain.errors import ConfigurationError
from omni_chain.chain.ir import DEFAULT_CURSOR_MARKER, UNDEFINED, Chain

from .recovery import CursorRecoveryService

if TYPE_CHECKING:
    from omni_chain.host.protocol import ChainHost


logger = logging.getLogger(__name__)


class Session:
    """Progress of one dispatcher through its chain."""

    def __init__(self) -> None:
        self.index: Optional[int] = None
        self.value: Any = UNDEFINED
        self.terminated = False

    def reset(self) -> None:
        self.index = 0
        self.value = UNDEFINED
        self.terminated = False


class SequencerContext:
    """State shared by every dispatcher of one foreground editor.

    Only one chain is live at a time, so the anchor and the active session
    are kept here rather than per dispatcher.
    """

    def __init__(self, *, cursor_marker: str = DEFAULT_CURSOR_MARKER) -> None:
        if not cursor_marker:
            raise ConfigurationError("cursor marker must not be empty")
        self.cursor_marker = cursor_marker
        self.recovery = CursorRecoveryService()
        self.active: Optional[Session] = None

    def activate(self, session: Session) -> None:
        self.active = session


default_context = SequencerContext()


class ChainDispatcher:
    """Zero-argument command stepping through a chain on repeated calls."""

    def __init__(
        self,
        chain: Chain,
        host: ChainHost,
        *,
        fallback: Optional[Callable[[], Any]] = None,
        context: Optional[SequencerContext] = None,
    ) -> None:
        self._chain = chain
        self._host = host
        self._fallback = fallback
        self._context = context or default_context
        self._session = Session()

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def session(self) -> Session:
        return self._session

    def _should_restart(self) -> bool:
        session = self._session
        return (
            not self._host.was_immediately_repeated()
            or session.terminated
            or self._chain.successor(session.index) is None
        )

    def __call__(self) -> None:
        session = self._session
        self._context.activate(session)

        if self._fallback is not None and self._host.get_numeric_prefix_argument() != 1:
            logger.debug("prefix argument given, running fallback")
            self._fallback()
            session.terminated = True
            return

        if self._should_restart():
            logger.debug("starting chain over")
            session.reset()
            self._context.recovery.capture(self._host)

        current = self._chain.actions[session.index]
        if current.cleanup is not None:
            run_cleanup(current.cleanup, session.value)

        self._context.recovery.restore_if_set(self._host)

        session.index = self._chain.successor(session.index)
        current = self._chain.actions[session.index]
        session.value = current.insert() if current.insert is not None else UNDEFINED
        logger.debug("chain step %d", session.index)
