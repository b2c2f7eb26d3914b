import pytest
from datetime import date, datetime, timezone
from types import SimpleNamespace

from teamboard.schemas.project import ProjectTree
from teamboard.services.analytics import (
    compute_member_stats,
    compute_rollups,
    compute_stats,
    is_overdue,
    percent,
    round_half_up,
)

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def task(completed):
    return SimpleNamespace(completed=completed)


def assignee(user_id, name=None, tasks=()):
    user = SimpleNamespace(name=name) if name else None
    return SimpleNamespace(user_id=user_id, user=user, tasks=list(tasks))


def project(id, parent_id=None, status="NOT_STARTED", priority="MEDIUM", progress=0,
            end_date=None, sub_projects=(), assignees=()):
    return SimpleNamespace(
        id=id, name=f"P{id}", parent_id=parent_id, status=status, priority=priority,
        progress=progress, end_date=end_date,
        sub_projects=list(sub_projects), assignees=list(assignees),
    )


@pytest.fixture
def scenario_forest():
    a = project(2, parent_id=1, status="COMPLETED", progress=100)
    b = project(3, parent_id=1, status="NOT_STARTED")
    t = project(1, sub_projects=[a, b])
    return [t]


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(66.666) == 67
    assert round_half_up(33.333) == 33
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(1, 0) == 0


def test_stats_scenario(scenario_forest):
    stats = compute_stats(scenario_forest, now=NOW)
    assert stats.total == 3
    assert stats.top_level == 1
    assert stats.sub_projects == 2
    assert stats.by_status == {"NOT_STARTED": 2, "IN_PROGRESS": 0, "COMPLETED": 1}
    assert stats.by_priority == {"LOW": 0, "MEDIUM": 3, "HIGH": 0, "URGENT": 0}
    assert stats.avg_progress == 33
    assert stats.project_completion_rate == 33


def test_stats_empty_forest():
    stats = compute_stats([], now=NOW)
    assert stats.total == 0
    assert stats.top_level == 0
    assert stats.sub_projects == 0
    assert stats.avg_progress == 0
    assert stats.overdue == 0
    assert stats.total_tasks == 0
    assert stats.task_completion_rate == 0
    assert stats.project_completion_rate == 0
    assert set(stats.by_status.values()) == {0}
    assert set(stats.by_priority.values()) == {0}
    assert stats.members == []


def test_stats_without_assignees_has_zero_tasks(scenario_forest):
    stats = compute_stats(scenario_forest, now=NOW)
    assert stats.total_tasks == 0
    assert stats.completed_tasks == 0
    assert stats.task_completion_rate == 0


def test_task_completion_rate():
    root = project(1, assignees=[assignee(7, "Alice", [task(True), task(False)])])
    stats = compute_stats([root], now=NOW)
    assert stats.total_tasks == 2
    assert stats.completed_tasks == 1
    assert stats.task_completion_rate == 50


def test_status_buckets_sum_to_total(scenario_forest):
    stats = compute_stats(scenario_forest, now=NOW)
    assert sum(stats.by_status.values()) == stats.total


def test_unknown_status_and_priority_are_not_counted():
    forest = [project(1, status="ARCHIVED", priority="CRITICAL"), project(2)]
    stats = compute_stats(forest, now=NOW)
    assert stats.total == 2
    assert sum(stats.by_status.values()) == 1
    assert sum(stats.by_priority.values()) == 1
    assert "ARCHIVED" not in stats.by_status


def test_overdue():
    forest = [
        project(1, end_date=date(2026, 6, 1)),
        project(2, end_date=date(2026, 6, 1), status="COMPLETED"),
        project(3, end_date=date(2026, 7, 1)),
        project(4),
        project(5, end_date=date(2026, 6, 15)),
    ]
    stats = compute_stats(forest, now=NOW)
    # 5: полночь 15.06 уже прошла к 12:00
    assert stats.overdue == 2
    assert is_overdue(forest[0], NOW) is True
    assert is_overdue(forest[2], NOW) is False


def test_overdue_with_naive_now():
    forest = [project(1, end_date=date(2020, 1, 1)), project(2, end_date=date(2026, 1, 1))]
    # наивное время трактуется как UTC
    stats = compute_stats(forest, now=datetime(2025, 1, 1))
    assert stats.overdue == 1
    assert is_overdue(forest[0], datetime(2025, 1, 1)) is True
    assert is_overdue(forest[1], datetime(2025, 1, 1)) is False


def test_stats_is_idempotent_and_does_not_mutate(scenario_forest):
    first = compute_stats(scenario_forest, now=NOW)
    second = compute_stats(scenario_forest, now=NOW)
    assert first == second
    assert [p.id for p in scenario_forest[0].sub_projects] == [2, 3]
    assert scenario_forest[0].sub_projects[1].status == "NOT_STARTED"


def test_out_of_range_progress_is_used_as_is():
    stats = compute_stats([project(1, progress=150), project(2, progress=50)], now=NOW)
    assert stats.avg_progress == 100


def test_member_stats_sorted_by_project_count():
    bob_1 = assignee(2, "Bob", [task(True)])
    alice = assignee(1, "Alice", [task(True), task(False)])
    bob_2 = assignee(2, "Bob", [task(False)])
    carol = assignee(3, "Carol")
    members = compute_member_stats([alice, bob_1, carol, bob_2])
    assert [m.user_id for m in members] == [2, 1, 3]
    bob = members[0]
    assert bob.project_count == 2
    assert bob.total_tasks == 2
    assert bob.completed_tasks == 1
    assert bob.completion_rate == 50
    assert members[2].completion_rate == 0


def test_member_without_user_uses_placeholder_name():
    members = compute_member_stats([assignee(9)])
    assert members[0].name == "Unassigned"


def test_rollups_per_top_level_project():
    done_task = task(True)
    open_task = task(False)
    sub = project(3, parent_id=2, status="COMPLETED", assignees=[assignee(1, "Alice", [done_task])])
    quarter = project(2, parent_id=1, sub_projects=[sub], assignees=[assignee(2, "Bob", [open_task])])
    first = project(1, sub_projects=[quarter])
    second = project(4, status="COMPLETED")

    rollups = compute_rollups([first, second])
    assert [r.project_id for r in rollups] == [1, 4]

    r1 = rollups[0]
    assert r1.total_sub_projects == 2
    assert r1.completed_projects == 1
    assert r1.completion_rate == 33
    assert r1.total_tasks == 2
    assert r1.completed_tasks == 1
    assert r1.task_completion_rate == 50

    r2 = rollups[1]
    assert r2.total_sub_projects == 0
    assert r2.completion_rate == 100
    assert r2.total_tasks == 0
    assert r2.task_completion_rate == 0


def test_rollups_empty_forest():
    assert compute_rollups([]) == []


def test_stats_on_project_tree_records():
    tree = ProjectTree(id=1, name="Root", sub_projects=[
        ProjectTree(id=2, name="A", parent_id=1, status="COMPLETED", progress=100),
        ProjectTree(id=3, name="B", parent_id=1),
    ])
    stats = compute_stats([tree], now=NOW)
    assert stats.total == 3
    assert stats.by_status["COMPLETED"] == 1
    assert stats.sub_projects == 2
