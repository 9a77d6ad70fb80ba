"""Key protocol: bindings, registry, and command decoding."""

from .models import ActionRef, Binding, Command, CommandKind, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_BINDINGS, load_default_keymaps


def default_resolver(*, logger_name: str | None = None) -> KeymapResolver:
    """Build a resolver over a fresh registry holding the default key table."""

    registry = KeymapRegistry(logger_name=logger_name)
    load_default_keymaps(registry)
    return KeymapResolver(registry, logger_name=logger_name)


__all__ = [
    "ActionRef",
    "Binding",
    "Command",
    "CommandKind",
    "DEFAULT_BINDINGS",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "default_resolver",
    "load_default_keymaps",
]
