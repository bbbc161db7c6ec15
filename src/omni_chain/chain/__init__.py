from __future__ import annotations

from .dsl import compose_actions, lower_element, normalize_element, parse_element
from .errors import ConfigurationError
from .frontend import ChainFrontend
from .ir import (
    DEFAULT_CURSOR_MARKER,
    LOOP,
    SENTINEL,
    UNDEFINED,
    Action,
    ActionElement,
    CallableElement,
    Chain,
    ChainSpec,
    Element,
    ListElement,
    PairElement,
    TextElement,
)

__all__ = [
    "Action",
    "ActionElement",
    "CallableElement",
    "Chain",
    "ChainFrontend",
    "ChainSpec",
    "ConfigurationError",
    "DEFAULT_CURSOR_MARKER",
    "Element",
    "LOOP",
    "ListElement",
    "PairElement",
    "SENTINEL",
    "TextElement",
    "UNDEFINED",
    "compose_actions",
    "lower_element",
    "normalize_element",
    "parse_element",
]
