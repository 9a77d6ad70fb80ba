"""Key resolution: turn one input character into a ``Command``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from rawedit.runtime.telemetry import span

from .models import ActionRef, Binding, Command, CommandKind, KeyStroke
from .registry import KeymapRegistry

_IGNORE = Command(CommandKind.IGNORE)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Decodes keystrokes against a registry, caching a command table per revision."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Optional[tuple[int, Dict[str, ResolutionMatch]]] = None

    def resolve(self, token: str) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"key": token},
        ) as handle:
            match = self._table().get(token)
            if match is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", match=match)

    def decode(self, key: str | KeyStroke) -> Command:
        """Classify ``key``: bound keys map to their action, other printables insert."""

        stroke = key if isinstance(key, KeyStroke) else KeyStroke(key)
        result = self.resolve(stroke.token)
        if result.match is not None:
            return result.match.action.command()
        if stroke.is_printable:
            return Command.insert(stroke.key)
        return _IGNORE

    def _table(self) -> Dict[str, ResolutionMatch]:
        revision = self._registry.revision()
        if self._cache and self._cache[0] == revision:
            return self._cache[1]

        table: Dict[str, ResolutionMatch] = {}
        for binding in self._registry.iter_bindings():
            action = self._registry.get_action(binding.action_id)
            table[binding.key_signature] = ResolutionMatch(binding=binding, action=action)
        self._cache = (revision, table)
        return table


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
