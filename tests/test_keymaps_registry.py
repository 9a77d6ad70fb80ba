import pytest

from rawedit.buffer import Direction
from rawedit.keymaps import (
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    CommandKind,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "edit.test") -> ActionRef:
    return ActionRef(id=action_id, kind=CommandKind.DELETE_LINE)


def make_binding(
    *,
    binding_id: str,
    token: str = "K",
    action_id: str = "edit.test",
) -> Binding:
    return Binding.for_token(binding_id, token, action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="key.K")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.binding_for_key("K") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="key.K"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="key.K.duplicate"))

    assert excinfo.value.existing.id == "key.K"


def test_register_binding_replace_moves_key() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    replacement = make_binding(binding_id="second")
    registry.register_binding(replacement, replace=True)

    assert registry.binding_for_key("K") == replacement
    assert [b.id for b in registry.iter_bindings()] == ["second"]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="key.K"))


def test_duplicate_action_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    registry.register_action(make_action(), replace=True)
    assert registry.stats().action_count == 1


def test_unregister_binding_frees_key_and_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="key.K"))
    revision = registry.revision()

    removed = registry.unregister_binding("key.K")

    assert removed is not None and removed.id == "key.K"
    assert registry.binding_for_key("K") is None
    assert registry.revision() > revision
    assert registry.unregister_binding("key.K") is None


def test_get_binding_unknown_raises() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.get_binding("missing")


def test_action_ref_requires_direction_only_for_moves() -> None:
    with pytest.raises(ValueError):
        ActionRef(id="move.nowhere", kind=CommandKind.MOVE)
    with pytest.raises(ValueError):
        ActionRef(id="bad", kind=CommandKind.SAVE, direction=Direction.UP)
    with pytest.raises(ValueError):
        ActionRef(id="insert", kind=CommandKind.INSERT_CHAR)


def test_load_default_keymaps_registers_protocol_table() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    for token in ("LF", "CR", "BS", "DEL", "TAB", "K", "O", "S", "Q"):
        assert token in stats.keys
    for token in "BFNPAEVC":
        assert token in stats.keys


def test_load_default_keymaps_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=("key.S", "key.O"))

    assert registry.binding_for_key("S") is None
    assert registry.binding_for_key("O") is None
    assert registry.binding_for_key("K") is not None


def test_load_default_keymaps_extra_bindings_override() -> None:
    registry = KeymapRegistry()
    extra = Binding.for_token("user.q", "Q", "file.save", source="user")

    load_default_keymaps(registry, extra_bindings=[extra])

    assert registry.binding_for_key("Q") == extra
