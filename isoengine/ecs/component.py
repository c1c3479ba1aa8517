"""Component type ids and per-type component storage."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

COMPONENT_ID_MAX = 2**32 - 1

T = TypeVar("T")


class ComponentRegistry:
    """Assigns a stable integer id to each component type."""

    def __init__(self, limit: int = COMPONENT_ID_MAX) -> None:
        self.limit = limit
        self._next = 0
        self._lookup: dict[type, int] = {}

    def id(self, component_type: type) -> int:
        """Return the id for ``component_type``, registering it if new.

        Raises OverflowError once every available id has been handed out.
        """
        if self._next == self.limit:
            raise OverflowError("Exceeding maximum component types in ComponentRegistry")
        try:
            return self._lookup[component_type]
        except KeyError:
            component_id = self._next
            self._lookup[component_type] = component_id
            self._next += 1
            return component_id


class ComponentList(Generic[T]):
    """Dense storage for components of a single type."""

    def __init__(self, component_type: type[T]) -> None:
        self.component_type = component_type
        self.components: list[T] = []

    def __len__(self) -> int:
        return len(self.components)

    def push(self, item: Any) -> None:
        """Append a component; it must be exactly of this list's type."""
        if type(item) is not self.component_type:
            raise TypeError(
                f"Component type mismatch: expected {self.component_type.__name__}, "
                f"got {type(item).__name__}"
            )
        self.components.append(item)

    def swap_remove(self, index: int) -> T:
        """Remove the item at ``index`` by moving the last item into its place."""
        if not 0 <= index < len(self.components):
            raise IndexError(f"swap_remove index {index} out of range")
        last = self.components.pop()
        if index == len(self.components):
            return last
        removed = self.components[index]
        self.components[index] = last
        return removed

    def at(self, index: int) -> T:
        """Return the component stored at ``index``."""
        return self.components[index]