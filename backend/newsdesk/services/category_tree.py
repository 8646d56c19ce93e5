from typing import Dict, Iterable, List, Optional

from newsdesk.schemas.category import CategoryNode


def node_sort_key(node: CategoryNode):
    # case-insensitive first, exact spelling and id break ties
    return (node.name.casefold(), node.name, node.id)


def _parents_on_cycles(parent_of: Dict[int, Optional[int]]) -> set:
    """Ids whose parent chain inside the given set loops back on itself"""
    finished = set()
    on_cycle = set()
    for start in parent_of:
        path: List[int] = []
        position: Dict[int, int] = {}
        current = start
        while current is not None and current not in finished:
            if current in position:
                on_cycle.update(path[position[current]:])
                break
            position[current] = len(path)
            path.append(current)
            current = parent_of[current]
        finished.update(path)
    return on_cycle


def build_category_tree(categories: Iterable) -> List[CategoryNode]:
    """
    Build the dropdown forest from an already filtered list of categories.

    A category hangs under its parent when the parent is part of the list,
    otherwise it becomes a root. Categories caught in a parent cycle lose
    their parent link and become roots, so the result is always a forest.
    Roots and children are sorted by name.
    """
    categories = list(categories)
    nodes: Dict[int, CategoryNode] = {
        c.id: CategoryNode(id=c.id, name=c.name, children=[]) for c in categories
    }
    parent_of: Dict[int, Optional[int]] = {
        c.id: c.parent_id if c.parent_id in nodes else None for c in categories
    }
    for category_id in _parents_on_cycles(parent_of):
        parent_of[category_id] = None

    roots: List[CategoryNode] = []
    for category_id, node in nodes.items():
        parent_id = parent_of[category_id]
        if parent_id is None:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    roots.sort(key=node_sort_key)
    for node in nodes.values():
        node.children.sort(key=node_sort_key)
    return roots
