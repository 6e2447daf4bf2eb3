from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from core.domain.enums import HealthTier, TaskStatus
from core.domain.project import Project
from core.domain.task import Task
from core.services.task import (
    MATCH_ALL,
    SortDirection,
    TaskSortKey,
    filter_projects,
    list_assignees,
    open_dependencies,
    select_tasks,
    subtasks,
    task_dependencies,
    task_tree,
)


def _task(task_id: str, status: TaskStatus, assignee: str, due: date | None) -> Task:
    return Task(id=task_id, project_id="p", title=task_id, status=status, assignee=assignee, due_date=due)


@pytest.fixture
def tasks():
    return [
        _task("t1", TaskStatus.DONE, "ana", date(2024, 5, 1)),
        _task("t2", TaskStatus.TODO, "ben", date(2024, 3, 1)),
        _task("t3", TaskStatus.DONE, "ben", date(2024, 2, 1)),
        _task("t4", TaskStatus.IN_PROGRESS, "ana", None),
        _task("t5", TaskStatus.DONE, "cy", date(2024, 2, 1)),
    ]


def _ids(items):
    return [t.id for t in items]


def test_done_tasks_by_ascending_due_date_keep_tie_order(tasks):
    selected = select_tasks(tasks, "done", MATCH_ALL, "dueDate", "asc")
    assert _ids(selected) == ["t3", "t5", "t1"]


def test_missing_due_date_sorts_first_ascending_and_last_descending(tasks):
    assert _ids(select_tasks(tasks))[0] == "t4"
    assert _ids(select_tasks(tasks, sort_direction=SortDirection.DESC))[-1] == "t4"


def test_descending_keeps_ties_in_input_order(tasks):
    selected = select_tasks(tasks, TaskStatus.DONE, sort_direction="desc")
    assert _ids(selected) == ["t1", "t3", "t5"]


def test_sort_by_status_is_lexicographic(tasks):
    selected = select_tasks(tasks, sort_key=TaskSortKey.STATUS)
    assert [t.status.value for t in selected] == ["done", "done", "done", "in-progress", "todo"]
    assert _ids(selected)[:3] == ["t1", "t3", "t5"]


def test_assignee_filter_is_exact(tasks):
    assert _ids(select_tasks(tasks, assignee_filter="ben")) == ["t3", "t2"]
    assert select_tasks(tasks, assignee_filter="Ben") == []


def test_all_filters_keep_every_task(tasks):
    assert len(select_tasks(tasks, MATCH_ALL, MATCH_ALL)) == len(tasks)
    assert len(select_tasks(tasks, None, None)) == len(tasks)


@pytest.mark.parametrize("key", list(TaskSortKey))
@pytest.mark.parametrize("direction", list(SortDirection))
def test_sorting_is_idempotent(tasks, key, direction):
    once = select_tasks(tasks, sort_key=key, sort_direction=direction)
    twice = select_tasks(once, sort_key=key, sort_direction=direction)
    assert twice == once


def test_input_is_not_mutated(tasks):
    before = list(tasks)
    select_tasks(tasks, "done", "ALL", "dueDate", "desc")
    assert tasks == before


def test_list_assignees(tasks):
    assert list_assignees(tasks + [_task("t6", TaskStatus.TODO, "", None)]) == ["ana", "ben", "cy"]


def test_filter_projects_by_health_and_name():
    alpha = Project.create("Alpha Migration", date(2024, 1, 1), date(2024, 6, 30), health=HealthTier.AT_RISK)
    beta = Project.create("Beta Rollout", date(2024, 1, 1), date(2024, 6, 30))
    gamma = Project.create("alpha pilot", date(2024, 1, 1), date(2024, 6, 30), health=HealthTier.OFF_TRACK)
    projects = [alpha, beta, gamma]

    assert filter_projects(projects) == projects
    assert filter_projects(projects, HealthTier.AT_RISK) == [alpha]
    assert filter_projects(projects, "off-track") == [gamma]
    assert filter_projects(projects, MATCH_ALL, "  ALPHA ") == [alpha, gamma]
    assert filter_projects(projects, "on-track", "alpha") == []


def _tree_project() -> Project:
    project = Project.create("Tree", date(2024, 1, 1), date(2024, 12, 31))
    return replace(
        project,
        tasks=(
            Task(id="root", project_id=project.id, title="Root"),
            Task(id="child-a", project_id=project.id, title="A", parent_id="root", dependencies=("root",)),
            Task(id="orphan", project_id=project.id, title="Orphan", parent_id="gone"),
            Task(
                id="child-b",
                project_id=project.id,
                title="B",
                parent_id="root",
                status=TaskStatus.DONE,
            ),
            Task(id="leaf", project_id=project.id, title="Leaf", parent_id="child-a", dependencies=("child-a", "child-b")),
        ),
    )


def test_dependencies_resolve_within_the_project():
    project = _tree_project()
    assert _ids(task_dependencies(project, "leaf")) == ["child-a", "child-b"]
    assert _ids(open_dependencies(project, "leaf")) == ["child-a"]
    assert task_dependencies(project, "missing") == []


def test_subtasks_and_tree():
    project = _tree_project()
    assert _ids(subtasks(project, "root")) == ["child-a", "child-b"]

    tree = [(depth, task.id) for depth, task in task_tree(project)]
    assert tree == [(0, "root"), (1, "child-a"), (2, "leaf"), (1, "child-b"), (0, "orphan")]
