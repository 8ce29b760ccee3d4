"""
measura.units.bimap
===================

A two-way, one-to-many association between *parents* and *children*.

Each child belongs to at most one parent at a time. Two write operations keep
both directions consistent:

- ``set_children(parent, children)`` replaces the parent's whole set. Children
  it no longer lists become unmapped; listed children are taken away from any
  previous parent.
- ``set_parent(child, parent)`` moves one child. Its previous parent loses only
  that child. Passing ``None`` unmaps the child.

The structure is not thread-safe on its own; the registry serialises access.
"""
from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, Optional, Set, TypeVar

P = TypeVar("P", bound=Hashable)
C = TypeVar("C", bound=Hashable)


class Bimap(Generic[P, C]):

    def __init__(self) -> None:
        self._parent_to_children: Dict[P, Set[C]] = {}
        self._child_to_parent: Dict[C, P] = {}

    # -------------------------- parent side ---------------------------------
    def children(self, parent: P) -> frozenset[C]:
        return frozenset(self._parent_to_children.get(parent, ()))

    def set_children(self, parent: P, children: Iterable[C]) -> None:
        new_children = set(children)

        # release every child the parent currently owns
        for child in self._parent_to_children.pop(parent, set()):
            self._child_to_parent.pop(child, None)

        # take the new children away from their previous parents
        for child in new_children:
            previous = self._child_to_parent.pop(child, None)
            if previous is not None:
                self._discard(previous, child)

        if new_children:
            self._parent_to_children[parent] = new_children
        for child in new_children:
            self._child_to_parent[child] = parent

    # -------------------------- child side ----------------------------------
    def parent(self, child: C) -> Optional[P]:
        return self._child_to_parent.get(child)

    def set_parent(self, child: C, parent: Optional[P]) -> None:
        previous = self._child_to_parent.pop(child, None)
        if previous is not None:
            self._discard(previous, child)
        if parent is not None:
            self._parent_to_children.setdefault(parent, set()).add(child)
            self._child_to_parent[child] = parent

    # -------------------------- helpers -------------------------------------
    def _discard(self, parent: P, child: C) -> None:
        owned = self._parent_to_children.get(parent)
        if owned is None:
            return
        owned.discard(child)
        if not owned:
            del self._parent_to_children[parent]

    def __contains__(self, child: object) -> bool:
        return child in self._child_to_parent

    def __iter__(self) -> Iterator[C]:
        return iter(self._child_to_parent)

    def __len__(self) -> int:
        return len(self._child_to_parent)

    def parents(self) -> frozenset[P]:
        return frozenset(self._parent_to_children)


__all__ = ["Bimap"]
