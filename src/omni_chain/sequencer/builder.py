from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple

from omni_chain.chain.dsl import normalize_element
from omni_chain.chain.errors import ConfigurationError
from omni_chain.chain.ir import SENTINEL, Action, Chain, LoopMarker

from .session import ChainDispatcher, SequencerContext, default_context

if TYPE_CHECKING:
    from omni_chain.host.protocol import ChainHost


logger = logging.getLogger(__name__)

WARNING_CATEGORY = "omni-chain"


def split_loop(spec: Sequence[Any]) -> Tuple[List[Any], Optional[List[Any]]]:
    """Split ``spec`` at its loop marker into (prefix, looped).

    ``looped`` is ``None`` when the spec has no marker.
    """

    positions = [i for i, element in enumerate(spec) if isinstance(element, LoopMarker)]
    if len(positions) > 1:
        raise ConfigurationError(
            f"loop marker appears {len(positions)} times in chain, at most once is allowed"
        )
    if not positions:
        return list(spec), None
    at = positions[0]
    return list(spec[:at]), list(spec[at + 1 :])


def build_chain(spec: Sequence[Any], host: ChainHost, *, marker: str) -> Chain:
    prefix, looped = split_loop(spec)
    prefix_actions = [normalize_element(element, host, marker=marker) for element in prefix]
    looped_actions = [normalize_element(element, host, marker=marker) for element in looped or []]

    if not looped_actions:
        return Chain(actions=(SENTINEL, *prefix_actions, SENTINEL))
    return Chain(
        actions=(SENTINEL, *prefix_actions, *looped_actions),
        loop_start=1 + len(prefix_actions),
    )


def _fallback_insert(fallback: Any, host: ChainHost, *, marker: str) -> Callable[[], Any]:
    action: Action = normalize_element(fallback, host, marker=marker)
    if action.insert is None:
        return lambda: None
    return action.insert


def build_dispatcher(
    spec: Sequence[Any],
    *,
    host: ChainHost,
    prefix_fallback: Any = None,
    marker: str | None = None,
    context: SequencerContext | None = None,
) -> ChainDispatcher:
    """Build a key-bindable command stepping through ``spec``.

    ``prefix_fallback`` replaces the whole chain for invocations with a
    numeric prefix argument other than 1. Malformed specs are reported
    through ``host.warn`` and raise ``ConfigurationError``.
    """

    context = context or default_context
    marker = marker if marker is not None else context.cursor_marker

    try:
        if not marker:
            raise ConfigurationError("cursor marker must not be empty")
        chain = build_chain(spec, host, marker=marker)
        fallback = (
            _fallback_insert(prefix_fallback, host, marker=marker)
            if prefix_fallback is not None
            else None
        )
    except ConfigurationError as exc:
        logger.error("cannot build chain: %s", exc)
        host.warn(WARNING_CATEGORY, str(exc))
        raise

    logger.debug(
        "built chain of %d actions (looping: %s, fallback: %s)",
        len(chain.actions),
        chain.loops,
        fallback is not None,
    )
    return ChainDispatcher(chain, host, fallback=fallback, context=context)
