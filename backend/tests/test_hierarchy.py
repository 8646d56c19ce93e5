from types import SimpleNamespace

import pytest

from newsdesk.services.hierarchy import CategoryHierarchy


def cat(id, parent_id=None, is_active=True):
    return SimpleNamespace(id=id, parent_id=parent_id, is_active=is_active, name=f"C{id}")


@pytest.mark.parametrize("flag", [True, False])
def test_root_follows_its_own_flag(flag):
    hierarchy = CategoryHierarchy([cat(1, is_active=flag)])
    assert hierarchy.is_effectively_active(1) is flag


@pytest.mark.parametrize("depth", [1, 2, 5, 50])
def test_inactive_ancestor_disables_whole_chain(depth):
    # 0 is the inactive root, depth levels of active descendants below it
    categories = [cat(0, is_active=False)] + [cat(i, parent_id=i - 1) for i in range(1, depth + 1)]
    hierarchy = CategoryHierarchy(categories)
    for i in range(depth + 1):
        assert not hierarchy.is_effectively_active(i)


def test_inactive_middle_node():
    hierarchy = CategoryHierarchy([
        cat(1),
        cat(2, parent_id=1, is_active=False),
        cat(3, parent_id=2),
        cat(4, parent_id=1),
    ])
    assert hierarchy.is_effectively_active(1)
    assert not hierarchy.is_effectively_active(2)
    assert not hierarchy.is_effectively_active(3)
    assert hierarchy.is_effectively_active(4)
    assert sorted(hierarchy.active_ids()) == [1, 4]
    assert sorted(hierarchy.inactive_ids()) == [2, 3]


def test_deep_chain_does_not_recurse():
    depth = 5000
    categories = [cat(0)] + [cat(i, parent_id=i - 1) for i in range(1, depth)]
    hierarchy = CategoryHierarchy(categories)
    assert hierarchy.is_effectively_active(depth - 1)


def test_missing_parent_fails_closed():
    hierarchy = CategoryHierarchy([cat(1, parent_id=99), cat(2, parent_id=1)])
    assert not hierarchy.is_effectively_active(1)
    assert not hierarchy.is_effectively_active(2)
    assert not hierarchy.is_effectively_active(99)


def test_cycle_is_inactive():
    hierarchy = CategoryHierarchy([
        cat(1, parent_id=3),
        cat(2, parent_id=1),
        cat(3, parent_id=2),
        cat(4, parent_id=3),
        cat(5),
    ])
    for category_id in (1, 2, 3, 4):
        assert not hierarchy.is_effectively_active(category_id)
    assert hierarchy.is_effectively_active(5)


def test_self_parent_is_inactive():
    hierarchy = CategoryHierarchy([cat(1, parent_id=1)])
    assert not hierarchy.is_effectively_active(1)


def test_results_do_not_depend_on_query_order():
    categories = [cat(1), cat(2, parent_id=1), cat(3, parent_id=2, is_active=False), cat(4, parent_id=3)]
    forward = CategoryHierarchy(categories)
    backward = CategoryHierarchy(categories)
    expected = {1: True, 2: True, 3: False, 4: False}
    assert {i: forward.is_effectively_active(i) for i in (1, 2, 3, 4)} == expected
    assert {i: backward.is_effectively_active(i) for i in (4, 3, 2, 1)} == expected


def test_would_create_cycle():
    hierarchy = CategoryHierarchy([cat(1), cat(2, parent_id=1), cat(3, parent_id=2), cat(4)])
    assert hierarchy.would_create_cycle(1, 1)
    assert hierarchy.would_create_cycle(1, 3)
    assert hierarchy.would_create_cycle(2, 3)
    assert not hierarchy.would_create_cycle(3, 1)
    assert not hierarchy.would_create_cycle(1, 4)
    assert not hierarchy.would_create_cycle(1, None)
