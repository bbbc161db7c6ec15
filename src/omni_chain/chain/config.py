from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .ir import DEFAULT_CURSOR_MARKER


class _Step(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TextStep(_Step):
    text: str


class PairStep(_Step):
    before: str
    after: str = ""


class CommandStep(_Step):
    command: str


class GroupStep(_Step):
    group: List[StepConfig]


class LoopStep(_Step):
    loop: Literal[True]


StepConfig = Union[str, TextStep, PairStep, CommandStep, GroupStep, LoopStep]

GroupStep.model_rebuild()


class ChainConfig(BaseModel):
    key: str
    steps: List[StepConfig] = Field(default_factory=list)
    fallback: Optional[StepConfig] = None
    description: Optional[str] = None


class Config(BaseModel):
    version: int | None = None
    description: str | None = None
    marker: str = Field(default=DEFAULT_CURSOR_MARKER, min_length=1)
    chain: List[ChainConfig] = Field(default_factory=list)
