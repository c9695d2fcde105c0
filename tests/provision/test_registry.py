import pytest
from pydantic import ValidationError

from provision.registry import Action, ActionRegistry


def test_register_appends_in_order():
    registry = ActionRegistry()
    first = registry.register("one", "First", lambda: None)
    registry.register("two", "Second", lambda: None)

    assert registry.count() == 2
    assert len(registry) == 2
    assert registry.get(0) is first
    assert registry.get(1).label == "Second"
    assert registry.names() == ["one", "two"]
    assert [action.name for action in registry] == ["one", "two"]


def test_sentinel_index_follows_last_action(abc_registry):
    assert abc_registry.sentinel_index == 3
    assert abc_registry.count() == 3


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_get_out_of_range_raises_index_error(abc_registry, index):
    with pytest.raises(IndexError):
        abc_registry.get(index)


def test_duplicate_name_rejected():
    registry = ActionRegistry()
    registry.register("one", "one", lambda: None)

    with pytest.raises(ValueError, match="already registered"):
        registry.register("one", "again", lambda: None)


def test_frozen_registry_rejects_registration(abc_registry):
    with pytest.raises(RuntimeError, match="frozen"):
        abc_registry.register("D", "D", lambda: None)
    assert abc_registry.count() == 3


def test_action_is_immutable():
    action = Action(name="a", label="A", run=lambda: None)

    with pytest.raises(ValidationError):
        action.name = "b"


def test_action_run_must_be_callable():
    with pytest.raises(ValidationError):
        Action(name="a", label="A", run="not callable")
