import pytest
from types import SimpleNamespace

from teamboard.core.exceptions import ProjectNotFound
from teamboard.schemas.project import ProjectTree
from teamboard.services.hierarchy import (
    ProjectForest,
    apply_status_rules,
    can_reparent,
    compute_level,
    fields_for_level,
    filter_fields_for_level,
    flatten_assignees,
    flatten_projects,
    level_for_parent,
)


def node(id, parent_id=None, sub_projects=None, assignees=None, status="NOT_STARTED"):
    return SimpleNamespace(
        id=id,
        name=f"P{id}",
        parent_id=parent_id,
        status=status,
        priority="MEDIUM",
        progress=0,
        end_date=None,
        sub_projects=sub_projects or [],
        assignees=assignees or [],
    )


@pytest.fixture
def nested_forest():
    """
    1
    ├── 2
    │   └── 4
    │       └── 5
    └── 3
    6
    """
    five = node(5, parent_id=4)
    four = node(4, parent_id=2, sub_projects=[five])
    two = node(2, parent_id=1, sub_projects=[four])
    three = node(3, parent_id=1)
    one = node(1, sub_projects=[two, three])
    six = node(6)
    return [one, six]


def test_flatten_is_pre_order(nested_forest):
    ids = [p.id for p in flatten_projects(nested_forest)]
    assert ids == [1, 2, 4, 5, 3, 6]


def test_flatten_visits_every_node_once_and_is_restartable(nested_forest):
    forest = ProjectForest(nested_forest)
    first = [p.id for p in flatten_projects(forest)]
    second = [p.id for p in flatten_projects(forest)]
    assert first == second
    assert len(first) == len(set(first)) == len(forest) == 6


def test_flat_input_uses_parent_id():
    flat = [node(3, parent_id=1), node(1), node(2, parent_id=1), node(4, parent_id=3)]
    forest = ProjectForest(flat)
    assert [p.id for p in forest.roots] == [1]
    assert [p.id for p in forest.children_of(1)] == [3, 2]
    assert [p.id for p in flatten_projects(forest)] == [1, 3, 4, 2]


def test_duplicate_ids_are_registered_once():
    shared = node(2, parent_id=1)
    one = node(1, sub_projects=[shared])
    forest = ProjectForest([one, shared])
    assert len(forest) == 2
    assert [p.id for p in forest.roots] == [1]


def test_flatten_empty_forest():
    assert flatten_projects([]) == []
    assert flatten_assignees([]) == []


def test_flatten_assignees_follows_traversal_order():
    a1 = SimpleNamespace(user_id=10, tasks=[])
    a2 = SimpleNamespace(user_id=11, tasks=[])
    a3 = SimpleNamespace(user_id=12, tasks=[])
    child = node(2, parent_id=1, assignees=[a2])
    root = node(1, sub_projects=[child], assignees=[a1])
    other = node(3, assignees=[a3])
    assert [a.user_id for a in flatten_assignees([root, other])] == [10, 11, 12]


def test_subtree_ids(nested_forest):
    forest = ProjectForest(nested_forest)
    assert forest.subtree_ids(2) == [2, 4, 5]
    assert forest.subtree_ids(6) == [6]
    with pytest.raises(ProjectNotFound):
        forest.subtree_ids(99)


def test_walk_from_node(nested_forest):
    forest = ProjectForest(nested_forest)
    assert [p.id for p in forest.walk(4)] == [4, 5]


# --- уровни ---

def test_compute_level_with_forest(nested_forest):
    forest = ProjectForest(nested_forest)
    assert compute_level(forest.get(1), forest) == 0
    assert compute_level(forest.get(2), forest) == 1
    assert compute_level(forest.get(4), forest) == 2
    assert compute_level(forest.get(5), forest) == 2


def test_compute_level_from_parent_relation():
    top = SimpleNamespace(id=1, parent_id=None, parent=None)
    quarter = SimpleNamespace(id=2, parent_id=1, parent=top)
    sub = SimpleNamespace(id=3, parent_id=2, parent=quarter)
    assert compute_level(top) == 0
    assert compute_level(quarter) == 1
    assert compute_level(sub) == 2


def test_compute_level_unresolvable_parent_raises():
    orphan = SimpleNamespace(id=7, parent_id=42, parent=None)
    with pytest.raises(ProjectNotFound):
        compute_level(orphan)
    with pytest.raises(ProjectNotFound):
        compute_level(orphan, [node(1)])


def test_level_for_parent():
    assert level_for_parent(None) == 0
    assert level_for_parent(node(1)) == 1
    assert level_for_parent(node(2, parent_id=1)) == 2


def test_compute_level_on_project_tree_records():
    tree = ProjectTree(id=1, name="Root", sub_projects=[
        ProjectTree(id=2, name="Q1", parent_id=1, sub_projects=[
            ProjectTree(id=3, name="Sub", parent_id=2),
        ]),
    ])
    forest = ProjectForest([tree])
    assert [compute_level(p, forest) for p in forest.walk()] == [0, 1, 2]


# --- перенос ---

def test_can_reparent_rejects_self_and_descendants(nested_forest):
    assert can_reparent(1, 1, nested_forest) is False
    assert can_reparent(1, 2, nested_forest) is False
    assert can_reparent(1, 5, nested_forest) is False
    assert can_reparent(2, 4, nested_forest) is False


def test_can_reparent_allows_other_positions(nested_forest):
    assert can_reparent(1, None, nested_forest) is True
    assert can_reparent(5, None, nested_forest) is True
    assert can_reparent(3, 2, nested_forest) is True
    assert can_reparent(4, 1, nested_forest) is True
    assert can_reparent(1, 6, nested_forest) is True
    assert can_reparent(5, 1, nested_forest) is True


def test_can_reparent_missing_ids(nested_forest):
    with pytest.raises(ProjectNotFound):
        can_reparent(99, 1, nested_forest)
    with pytest.raises(ProjectNotFound):
        can_reparent(1, 99, nested_forest)


def test_can_reparent_does_not_mutate_input(nested_forest):
    before = [(p.id, p.parent_id) for p in flatten_projects(nested_forest)]
    can_reparent(1, 5, nested_forest)
    can_reparent(3, 2, nested_forest)
    assert [(p.id, p.parent_id) for p in flatten_projects(nested_forest)] == before


# --- правила полей ---

def test_fields_for_level_are_cumulative():
    assert fields_for_level(0) == {"name", "description", "goal", "key_results"}
    assert fields_for_level(0) < fields_for_level(1) < fields_for_level(2)
    assert "priority" in fields_for_level(1)
    assert "status" not in fields_for_level(1)
    assert {"status", "start_date", "end_date", "progress"} <= fields_for_level(2)
    assert fields_for_level(5) == fields_for_level(2)


def test_filter_fields_for_level_drops_hidden_fields():
    data = {"name": "X", "priority": "HIGH", "status": "COMPLETED", "progress": 40, "parent_id": None}
    assert filter_fields_for_level(data, 0) == {"name": "X", "parent_id": None}
    assert filter_fields_for_level(data, 1) == {"name": "X", "priority": "HIGH", "parent_id": None}
    assert filter_fields_for_level(data, 2) == data


def test_apply_status_rules():
    data = {"status": "COMPLETED", "progress": 30}
    result = apply_status_rules(data)
    assert result["progress"] == 100
    assert data["progress"] == 30
    assert apply_status_rules({"status": "IN_PROGRESS", "progress": 30})["progress"] == 30
    assert apply_status_rules({"name": "X"}) == {"name": "X"}
