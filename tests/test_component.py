import pytest

from isoengine.ecs.component import ComponentList, ComponentRegistry


class Position:
    def __init__(self, name):
        self.name = name


class Velocity:
    pass


class SubPosition(Position):
    pass


def test_first_component_id_is_zero():
    registry = ComponentRegistry()
    assert registry.id(Position) == 0


def test_ids_are_stable_and_distinct():
    registry = ComponentRegistry()
    pos = registry.id(Position)
    vel = registry.id(Velocity)
    assert pos != vel
    assert registry.id(Position) == pos
    assert registry.id(Velocity) == vel


def test_registry_limit_raises():
    registry = ComponentRegistry(limit=1)
    registry.id(Position)
    with pytest.raises(OverflowError):
        registry.id(Velocity)


def test_registry_limit_applies_even_to_known_types():
    registry = ComponentRegistry(limit=1)
    registry.id(Position)
    with pytest.raises(OverflowError):
        registry.id(Position)


def test_push_and_at():
    store = ComponentList(Position)
    a, b = Position("a"), Position("b")
    store.push(a)
    store.push(b)
    assert len(store) == 2
    assert store.at(0) is a
    assert store.at(1) is b


def test_push_wrong_type_raises():
    store = ComponentList(Position)
    with pytest.raises(TypeError):
        store.push(Velocity())
    with pytest.raises(TypeError):
        store.push(SubPosition("x"))
    assert len(store) == 0


def test_swap_remove_moves_last_into_slot():
    store = ComponentList(Position)
    items = [Position(n) for n in "abc"]
    for item in items:
        store.push(item)
    removed = store.swap_remove(0)
    assert removed is items[0]
    assert [store.at(i) for i in range(len(store))] == [items[2], items[1]]


def test_swap_remove_last_element():
    store = ComponentList(Position)
    items = [Position(n) for n in "ab"]
    for item in items:
        store.push(item)
    assert store.swap_remove(1) is items[1]
    assert len(store) == 1
    assert store.at(0) is items[0]


def test_swap_remove_out_of_range():
    store = ComponentList(Position)
    with pytest.raises(IndexError):
        store.swap_remove(0)