"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from rawedit.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    keys: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key that is already bound."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on key {binding.key_signature!r}"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the key -> binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._key_index: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def binding_for_key(self, token: str) -> Optional[Binding]:
        binding_id = self._key_index.get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            self._touch()
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "key": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.binding_for_key(binding.key_signature)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._unindex(self._bindings[binding.id])
            if existing is not None and existing.id != binding.id:
                self._bindings.pop(existing.id, None)
                self._unindex(existing)

            self._bindings[binding.id] = binding
            self._key_index[binding.key_signature] = binding.id
            self._touch()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.pop(binding_id, None)
            if not binding:
                return None
            self._unindex(binding)
            self._touch()
            return binding

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            keys=tuple(sorted(self._key_index)),
        )

    def _unindex(self, binding: Binding) -> None:
        if self._key_index.get(binding.key_signature) == binding.id:
            del self._key_index[binding.key_signature]

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
