"""The world: entities, their components, and system queries over them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .component import ComponentList, ComponentRegistry
from .entity import Entity, EntityRegistry


class EntityNotFoundError(LookupError):
    """Raised when an entity is not alive in the world."""


class DuplicateComponentError(ValueError):
    """Raised when an entity already holds a component of the given type."""


@dataclass(frozen=True)
class Maybe:
    """Optional system parameter: fetches the component or None, never fails."""

    component_type: type


_MISSING = object()


class World:
    """Stores entities and their components, grouped by archetype."""

    def __init__(self) -> None:
        self._entity_registry = EntityRegistry()
        self._entities: dict[Entity, dict[int, int]] = {}
        self._entity_lookup: dict[tuple[int, int], Entity] = {}
        self._component_registry = ComponentRegistry()
        self._components: dict[int, ComponentList] = {}
        self._archetype_lookup: dict[Entity, int] = {}
        self._archetypes: dict[frozenset[int], list[Entity]] = {}

    def component_id(self, component_type: type) -> int:
        """Return the registry id of ``component_type``."""
        return self._component_registry.id(component_type)

    def get_component(self, entity: Entity, component_type: type) -> Any:
        """Return the entity's component of this type, or None."""
        component_id = self.component_id(component_type)
        indices = self._entities.get(entity)
        if indices is None or component_id not in indices:
            return None
        return self._components[component_id].at(indices[component_id])

    def _fetch(self, params: Any, entity: Entity) -> Any:
        if isinstance(params, tuple):
            items = []
            for param in params:
                item = self._fetch(param, entity)
                if item is _MISSING:
                    return _MISSING
                items.append(item)
            return tuple(items)
        if isinstance(params, Maybe):
            return self.get_component(entity, params.component_type)
        component = self.get_component(entity, params)
        return _MISSING if component is None else component

    def system(self, params: Any, func: Callable[[Entity, Any], Any]) -> None:
        """Call ``func(entity, items)`` for every entity matching ``params``.

        ``params`` is a component type, a ``Maybe``, or a tuple of those; a
        tuple yields a tuple of items in the same order.
        """
        for entity in list(self._entities):
            items = self._fetch(params, entity)
            if items is not _MISSING:
                func(entity, items)

    def entity_system(
        self, entity: Entity, params: Any, func: Callable[[Entity, Any], Any]
    ) -> None:
        """Call ``func(entity, items)`` if this single entity matches ``params``."""
        items = self._fetch(params, entity)
        if items is not _MISSING:
            func(entity, items)

    def spawn_entity(self, *args: Any) -> Entity:
        """Create an entity holding the given components and return it."""
        entity = self._entity_registry.new_entity()
        self._entities[entity] = {}
        for component in args:
            self.add_component(entity, component)
        return entity

    def _require(self, entity: Entity) -> dict[int, int]:
        try:
            return self._entities[entity]
        except KeyError:
            raise EntityNotFoundError(f"Entity not found in World: {entity}") from None

    def _leave_archetype(self, entity: Entity, key: frozenset[int]) -> None:
        index = self._archetype_lookup.pop(entity, None)
        if index is None:
            return
        members = self._archetypes[key]
        last = members.pop()
        if index < len(members):
            members[index] = last
            self._archetype_lookup[last] = index

    def add_component(self, entity: Entity, component: Any) -> None:
        """Attach ``component`` to ``entity``."""
        component_type = type(component)
        component_id = self.component_id(component_type)
        indices = self._require(entity)
        if component_id in indices:
            raise DuplicateComponentError(
                f"Entity already contains a {component_type.__name__} component"
            )

        store = self._components.get(component_id)
        if store is None:
            store = self._components[component_id] = ComponentList(component_type)

        old_key = frozenset(indices)
        index = len(store)
        store.push(component)
        self._entity_lookup[(component_id, index)] = entity
        indices[component_id] = index

        self._leave_archetype(entity, old_key)
        members = self._archetypes.setdefault(old_key | {component_id}, [])
        self._archetype_lookup[entity] = len(members)
        members.append(entity)

    def despawn_entity(self, entity: Entity) -> None:
        """Remove ``entity`` and all its components from the world."""
        indices = self._require(entity)
        self._leave_archetype(entity, frozenset(indices))

        for component_id, index in indices.items():
            store = self._components[component_id]
            store.swap_remove(index)
            last = len(store)
            moved = self._entity_lookup.pop((component_id, last))
            if index < last:
                self._entity_lookup[(component_id, index)] = moved
                self._entities[moved][component_id] = index

        del self._entities[entity]
        self._entity_registry.remove_entity(entity)