"""
Effective active state of hierarchical categories.

A category is effectively active when its own flag is set and every ancestor
up to the root is active too. Parent links come straight from the database
and are not guaranteed to be acyclic, so the walk keeps track of what it has
visited: a category whose chain loops, or points at a parent that does not
exist, is treated as inactive.

One resolver is built per request from a snapshot of all categories. Its
memo table must not outlive that request, otherwise edits to flags or parent
links would be missed.
"""

from typing import Dict, Iterable, List, Optional, Protocol


class HierarchyNode(Protocol):
    id: int
    parent_id: Optional[int]
    is_active: bool


class CategoryHierarchy:

    def __init__(self, categories: Iterable[HierarchyNode]):
        self._by_id: Dict[int, HierarchyNode] = {c.id: c for c in categories}
        self._memo: Dict[int, bool] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def is_effectively_active(self, category_id: int) -> bool:
        if category_id in self._memo:
            return self._memo[category_id]

        # Every category pushed on the path is itself active and has a
        # parent, so they all share the result found at the end of the walk.
        path: List[int] = []
        on_path = set()
        current = category_id
        while True:
            if current in self._memo:
                result = self._memo[current]
                break
            if current in on_path:
                result = False  # cycle
                break
            category = self._by_id.get(current)
            if category is None or not category.is_active:
                self._memo[current] = result = False
                break
            if category.parent_id is None:
                self._memo[current] = result = True
                break
            path.append(current)
            on_path.add(current)
            current = category.parent_id

        for node_id in path:
            self._memo[node_id] = result
        return result

    def active_ids(self) -> List[int]:
        return [cid for cid in self._by_id if self.is_effectively_active(cid)]

    def inactive_ids(self) -> List[int]:
        return [cid for cid in self._by_id if not self.is_effectively_active(cid)]

    def would_create_cycle(self, category_id: int, new_parent_id: Optional[int]) -> bool:
        """True when new_parent_id is category_id itself or one of its descendants"""
        current = new_parent_id
        seen = set()
        while current is not None and current not in seen:
            if current == category_id:
                return True
            seen.add(current)
            parent = self._by_id.get(current)
            current = parent.parent_id if parent is not None else None
        return False
