from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from omni_chain.chain.ir import Position

if TYPE_CHECKING:
    from omni_chain.host.protocol import ChainHost


logger = logging.getLogger(__name__)


class CursorRecoveryService:
    """Holds the anchor every chain step starts from."""

    def __init__(self) -> None:
        self._anchor: Optional[Position] = None
        self._disabled = False

    @property
    def anchor(self) -> Optional[Position]:
        return self._anchor

    @property
    def disabled(self) -> bool:
        return self._disabled

    def capture(self, host: ChainHost) -> None:
        if self._disabled:
            return
        self._anchor = host.get_cursor_position()
        logger.debug("anchor set to %d", self._anchor)

    def restore_if_set(self, host: ChainHost) -> None:
        if self._anchor is not None:
            host.set_cursor_position(self._anchor)

    def disable(self) -> None:
        """Drop the anchor and never capture one again."""

        self._anchor = None
        self._disabled = True
        logger.debug("point recovery disabled")
