from types import SimpleNamespace

from newsdesk.crud.category import get_category_dropdown
from newsdesk.schemas.category import DropdownQuery
from newsdesk.services.category_tree import build_category_tree


def cat(id, name, parent_id=None, is_active=True):
    return SimpleNamespace(id=id, name=name, parent_id=parent_id, is_active=is_active)


def shape(nodes):
    return [(n.name, shape(n.children)) for n in nodes]


def all_sibling_lists(nodes):
    yield nodes
    for node in nodes:
        yield from all_sibling_lists(node.children)


def test_children_attach_under_parent():
    tree = build_category_tree([cat(1, "World"), cat(2, "Asia", 1), cat(3, "Europe", 1), cat(4, "Sports")])
    assert shape(tree) == [("Sports", []), ("World", [("Asia", []), ("Europe", [])])]


def test_missing_parent_becomes_root():
    tree = build_category_tree([cat(2, "Asia", parent_id=1)])
    assert shape(tree) == [("Asia", [])]


def test_ordering_ignores_case_then_uses_exact_name_and_id():
    tree = build_category_tree([
        cat(1, "beta"),
        cat(2, "Alpha"),
        cat(3, "alpha"),
        cat(4, "Beta"),
        cat(5, "alpha"),
    ])
    assert [(n.name, n.id) for n in tree] == [
        ("Alpha", 2), ("alpha", 3), ("alpha", 5), ("Beta", 4), ("beta", 1),
    ]


def test_every_level_is_sorted():
    categories = [cat(1, "root")] + [
        cat(i, name, parent_id=1) for i, name in enumerate(["delta", "Charlie", "bravo", "Alpha"], start=2)
    ]
    tree = build_category_tree(categories)
    for siblings in all_sibling_lists(tree):
        keys = [n.name.casefold() for n in siblings]
        assert keys == sorted(keys)


def test_cycle_members_become_roots():
    tree = build_category_tree([
        cat(1, "A", parent_id=2),
        cat(2, "B", parent_id=1),
        cat(3, "C", parent_id=2),
    ])
    assert shape(tree) == [("A", []), ("B", [("C", [])])]


def test_self_parent_becomes_root():
    tree = build_category_tree([cat(1, "Loop", parent_id=1)])
    assert shape(tree) == [("Loop", [])]


def test_dropdown_excludes_inactive_subtree(db, make_category):
    a = make_category("A")
    make_category("B", parent=a)
    make_category("C", parent=a, is_active=False)

    tree = get_category_dropdown(db, DropdownQuery(include_inactive=False))
    assert shape(tree) == [("A", [("B", [])])]


def test_dropdown_drops_descendants_of_inactive_category(db, make_category):
    a = make_category("A", is_active=False)
    b = make_category("B", parent=a)
    make_category("D", parent=b)
    make_category("E")

    assert shape(get_category_dropdown(db, DropdownQuery())) == [("E", [])]


def test_dropdown_can_include_inactive(db, make_category):
    a = make_category("A")
    make_category("B", parent=a)
    make_category("C", parent=a, is_active=False)

    tree = get_category_dropdown(db, DropdownQuery(include_inactive=True))
    assert shape(tree) == [("A", [("B", []), ("C", [])])]


def test_dropdown_parent_only(db, make_category):
    a = make_category("A")
    make_category("B", parent=a)
    make_category("Z")

    tree = get_category_dropdown(db, DropdownQuery(parent_only=True))
    assert shape(tree) == [("A", []), ("Z", [])]
