from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping
import logging
import tomllib

from pydantic import ValidationError

from .config import CommandStep, Config, GroupStep, LoopStep, PairStep, StepConfig, TextStep
from .errors import ConfigurationError
from .ir import LOOP, ChainSpec


logger = logging.getLogger(__name__)


class ChainFrontend:
    """Parse config (TOML) into declarative chain specs."""

    def __init__(self, commands: Mapping[str, Callable[..., Any]] | None = None) -> None:
        self._commands: Dict[str, Callable[..., Any]] = dict(commands or {})

    def load_toml(self, path: str | Path) -> Dict[str, Any]:
        """Load a TOML config file into a dict."""

        path = Path(path)
        return tomllib.loads(path.read_text(encoding="utf-8"))

    def parse_config(self, config: Dict[str, Any]) -> List[ChainSpec]:
        try:
            return self._parse(config)
        except ConfigurationError as exc:
            logger.error("cannot load chain config: %s", exc)
            raise

    def _parse(self, config: Dict[str, Any]) -> List[ChainSpec]:
        try:
            cfg = Config.model_validate(config)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid chain config: {exc}") from exc

        specs: List[ChainSpec] = []
        seen: set[str] = set()
        for chain in cfg.chain:
            if chain.key in seen:
                raise ConfigurationError(f"key {chain.key!r} is bound to more than one chain")
            seen.add(chain.key)

            specs.append(
                ChainSpec(
                    key=chain.key,
                    elements=[self._to_element(step) for step in chain.steps],
                    fallback=self._to_element(chain.fallback) if chain.fallback is not None else None,
                    marker=cfg.marker,
                    description=chain.description,
                )
            )

        return specs

    def _to_element(self, step: StepConfig) -> Any:
        if isinstance(step, str):
            return step
        if isinstance(step, TextStep):
            return step.text
        if isinstance(step, PairStep):
            return (step.before, step.after)
        if isinstance(step, CommandStep):
            try:
                return self._commands[step.command]
            except KeyError:
                raise ConfigurationError(f"unknown command {step.command!r}") from None
        if isinstance(step, GroupStep):
            return [self._to_element(member) for member in step.group]
        if isinstance(step, LoopStep):
            return LOOP
        raise ConfigurationError(f"unsupported step: {step!r}")
