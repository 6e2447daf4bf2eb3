from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from core.domain.auth import RoleDefinition, UserAccount
from core.domain.baseline import ProjectBaseline
from core.domain.enums import HealthTier, Module, Permission, RiskSeverity, TaskStatus, UserStatus
from core.domain.project import Project, ProjectRisk
from core.domain.task import Task
from core.exceptions import NotFoundError
from infra.db.repositories import (
    SqlAlchemyProjectRepository,
    SqlAlchemyRoleDefinitionRepository,
    SqlAlchemyUserRepository,
)


def _project() -> Project:
    project = Project.create(
        "Stored",
        date(2024, 1, 1),
        date(2024, 12, 31),
        owner="ana",
        progress=30.0,
        budget=5000.0,
        health=HealthTier.AT_RISK,
    )
    tasks = (
        Task(id="t1", project_id=project.id, title="Plan", status=TaskStatus.DONE, start_date=date(2024, 1, 2), due_date=date(2024, 1, 20)),
        Task(id="t2", project_id=project.id, title="Build", assignee="ben", dependencies=("t1",), parent_id="t1"),
    )
    return replace(
        project,
        tasks=tasks,
        risks=(ProjectRisk.create("Vendor delay", RiskSeverity.HIGH),),
        baseline=ProjectBaseline(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 11, 30),
            budget=4000.0,
            progress=10.0,
            timestamp=datetime(2024, 2, 1, 8, 30, tzinfo=timezone.utc),
        ),
    )


def test_project_round_trip_normalizes_task_dates(session):
    repo = SqlAlchemyProjectRepository(session)
    project = _project()
    repo.add(project)
    session.commit()

    loaded = repo.get(project.id)

    assert loaded.name == "Stored"
    assert loaded.health == HealthTier.AT_RISK
    assert loaded.risks == project.risks
    assert loaded.baseline == project.baseline
    assert [t.id for t in loaded.tasks] == ["t1", "t2"]
    build = loaded.find_task("t2")
    assert build.start_date == date(2024, 1, 1)
    assert build.due_date == date(2024, 12, 31)
    assert build.dependencies == ("t1",)
    assert build.parent_id == "t1"


def test_update_replaces_children_and_removes_baseline(session):
    repo = SqlAlchemyProjectRepository(session)
    project = _project()
    repo.add(project)
    session.commit()

    extra = Task(id="t3", project_id=project.id, title="Ship", due_date=date(2024, 12, 1))
    changed = replace(
        repo.get(project.id),
        progress=55.0,
        tasks=(repo.get(project.id).find_task("t2"), extra),
        risks=(),
        baseline=None,
    )
    repo.update(changed)
    session.commit()

    loaded = repo.get(project.id)
    assert loaded.progress == 55.0
    assert [t.id for t in loaded.tasks] == ["t2", "t3"]
    assert loaded.risks == ()
    assert loaded.baseline is None


def test_update_of_unknown_project_raises(session):
    repo = SqlAlchemyProjectRepository(session)
    with pytest.raises(NotFoundError):
        repo.update(_project())


def test_list_all_orders_by_start_date(session):
    repo = SqlAlchemyProjectRepository(session)
    later = Project.create("Later", date(2024, 5, 1), date(2024, 6, 1))
    earlier = Project.create("Earlier", date(2024, 2, 1), date(2024, 6, 1))
    repo.add(later)
    repo.add(earlier)
    session.commit()

    assert [p.name for p in repo.list_all()] == ["Earlier", "Later"]


def test_user_repository(session):
    repo = SqlAlchemyUserRepository(session)
    user = UserAccount.create("Kim", "kim@example.com", "CONTRIBUTOR")
    repo.add(user)
    session.commit()

    assert repo.get_by_email("kim@example.com") == user
    repo.update(replace(user, status=UserStatus.ACTIVE))
    session.commit()
    assert repo.get(user.id).status == UserStatus.ACTIVE
    assert [u.name for u in repo.list_all()] == ["Kim"]
    assert repo.get_by_email("nobody@example.com") is None


def test_role_definition_repository_round_trip(session):
    repo = SqlAlchemyRoleDefinitionRepository(session)
    definition = RoleDefinition.create(
        "AUDITOR",
        "Auditor",
        global_permissions=[Permission.VIEW, Permission.EXPORT],
        module_permissions={Module.ADMIN: [Permission.VIEW_AUDIT_LOGS]},
    )
    repo.upsert(definition)
    session.commit()

    assert repo.get("AUDITOR") == definition

    repo.upsert(replace(definition, name="Internal Auditor"))
    session.commit()
    assert repo.get("AUDITOR").name == "Internal Auditor"
    assert [d.role_id for d in repo.list_all()] == ["AUDITOR"]


def test_same_task_id_in_two_projects_is_kept_apart(session):
    repo = SqlAlchemyProjectRepository(session)
    first = Project.create("First", date(2024, 1, 1), date(2024, 6, 30))
    second = Project.create("Second", date(2024, 3, 1), date(2024, 9, 30))
    first = replace(first, tasks=(Task(id="task-1", project_id=first.id, title="Kickoff"),))
    second = replace(second, tasks=(Task(id="task-1", project_id=second.id, title="Launch"),))
    repo.add(first)
    session.commit()
    repo.add(second)
    session.commit()

    assert [t.title for t in repo.get(first.id).tasks] == ["Kickoff"]
    assert [t.title for t in repo.get(second.id).tasks] == ["Launch"]

    repo.update(replace(repo.get(second.id), tasks=()))
    session.commit()

    assert [t.title for t in repo.get(first.id).tasks] == ["Kickoff"]
    assert repo.get(second.id).tasks == ()
