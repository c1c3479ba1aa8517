"""Entity handles and the registry that hands them out."""

from __future__ import annotations

from dataclasses import dataclass, field

ENTITY_ID_MAX = 2**32 - 1


@dataclass(frozen=True)
class Entity:
    """A generational handle to an entity."""

    id: int
    generation: int = 0


@dataclass
class EntityRegistry:
    """Allocates entity handles and recycles freed ids with a bumped generation."""

    limit: int = ENTITY_ID_MAX
    _free: list[Entity] = field(default_factory=list, init=False, repr=False)
    _next: int = field(default=0, init=False, repr=False)

    def new_entity(self) -> Entity:
        """Return a fresh handle, reusing the most recently freed id when possible."""
        if self._free:
            freed = self._free.pop()
            if freed.generation != ENTITY_ID_MAX:
                return Entity(freed.id, freed.generation + 1)

        if self._next == self.limit:
            raise OverflowError("Maximum number of entities exceeded")

        entity = Entity(self._next, 0)
        self._next += 1
        return entity

    def remove_entity(self, entity: Entity) -> None:
        """Release an entity's id for reuse."""
        self._free.append(entity)