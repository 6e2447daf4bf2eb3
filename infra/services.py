from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from sqlalchemy.orm import Session

from core.domain.clock import Clock, system_clock
from core.events.domain_events import DomainEvents, domain_events
from core.services.audit import AuditService
from core.services.auth.service import AuthService
from core.services.auth.session import UserSessionContext
from core.services.baseline import BaselineService
from core.services.health.engine import DEFAULT_HEALTH_THRESHOLDS, HealthThresholds
from core.services.project import ProjectService
from core.services.task import TaskService
from core.services.timeline.layout import DEFAULT_ZOOM_MULTIPLIERS, ZoomScale
from infra.db.base import build_engine, build_session_factory, default_db_url
from infra.db.repositories import (
    SqlAlchemyAuditLogRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyRoleDefinitionRepository,
    SqlAlchemyUserRepository,
)
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.settings import PolicySettingsStore
from infra.trace import bind_trace_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    user_session: UserSessionContext
    auth_service: AuthService
    audit_service: AuditService
    project_service: ProjectService
    task_service: TaskService
    baseline_service: BaselineService
    thresholds: HealthThresholds
    zoom_multipliers: Mapping[ZoomScale, float]

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "user_session": self.user_session,
            "auth_service": self.auth_service,
            "audit_service": self.audit_service,
            "project_service": self.project_service,
            "task_service": self.task_service,
            "baseline_service": self.baseline_service,
        }


def build_service_graph(
    session: Session,
    *,
    clock: Clock = system_clock,
    settings_store: PolicySettingsStore | None = None,
    events: DomainEvents = domain_events,
    bootstrap: bool = True,
) -> ServiceGraph:
    if settings_store is not None:
        thresholds = settings_store.load_health_thresholds()
        zoom_multipliers = settings_store.load_zoom_multipliers()
    else:
        thresholds = DEFAULT_HEALTH_THRESHOLDS
        zoom_multipliers = dict(DEFAULT_ZOOM_MULTIPLIERS)

    user_session = UserSessionContext()
    project_repo = SqlAlchemyProjectRepository(session)
    user_repo = SqlAlchemyUserRepository(session)
    role_repo = SqlAlchemyRoleDefinitionRepository(session)
    audit_repo = SqlAlchemyAuditLogRepository(session)

    audit_service = AuditService(
        session=session,
        audit_repo=audit_repo,
        user_session=user_session,
        clock=clock,
    )
    auth_service = AuthService(
        session=session,
        user_repo=user_repo,
        role_repo=role_repo,
        user_session=user_session,
        audit_service=audit_service,
        events=events,
    )
    if bootstrap:
        auth_service.bootstrap_defaults()

    shared = dict(
        user_session=user_session,
        audit_service=audit_service,
        clock=clock,
        thresholds=thresholds,
        events=events,
    )
    project_service = ProjectService(
        session,
        project_repo,
        zoom_multipliers=zoom_multipliers,
        **shared,
    )
    task_service = TaskService(
        session,
        project_repo,
        zoom_multipliers=zoom_multipliers,
        **shared,
    )
    baseline_service = BaselineService(session, project_repo, **shared)

    return ServiceGraph(
        session=session,
        user_session=user_session,
        auth_service=auth_service,
        audit_service=audit_service,
        project_service=project_service,
        task_service=task_service,
        baseline_service=baseline_service,
        thresholds=thresholds,
        zoom_multipliers=zoom_multipliers,
    )


def build_service_dict(session: Session, **kwargs: Any) -> dict[str, Any]:
    return build_service_graph(session, **kwargs).as_dict()


def open_service_graph(
    db_url: str | None = None,
    *,
    clock: Clock = system_clock,
    settings_store: PolicySettingsStore | None = None,
    events: DomainEvents = domain_events,
) -> ServiceGraph:
    """Application startup: upgrade the schema, open a session, wire services."""
    url = db_url or default_db_url()
    run_migrations(url)
    session = build_session_factory(build_engine(url))()
    return build_service_graph(
        session,
        clock=clock,
        settings_store=settings_store or PolicySettingsStore(),
        events=events,
    )


def start_application(
    db_url: str | None = None,
    *,
    log_dir: Path | None = None,
    clock: Clock = system_clock,
    settings_store: PolicySettingsStore | None = None,
    events: DomainEvents = domain_events,
) -> ServiceGraph:
    """Boot entry point: logging first, then the schema and the service graph."""
    log_file = setup_logging(log_dir=log_dir)
    with bind_trace_id() as trace_id:
        logger.info("Starting portfolio services (trace %s, log %s)", trace_id, log_file)
        return open_service_graph(
            db_url,
            clock=clock,
            settings_store=settings_store,
            events=events,
        )
