import logging

from sqlalchemy import create_engine, inspect

from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.trace import TraceIdLogFilter, bind_trace_id, current_trace_id


def test_bind_trace_id_scopes_the_context():
    assert current_trace_id() is None
    with bind_trace_id("drag-42") as trace_id:
        assert trace_id == "drag-42"
        assert current_trace_id() == "drag-42"
    assert current_trace_id() is None

    with bind_trace_id() as generated:
        assert generated.startswith("trc-")


def test_trace_filter_stamps_records():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    TraceIdLogFilter().filter(record)
    assert record.trace_id == "-"

    with bind_trace_id("abc"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "abc"


def test_setup_logging_writes_trace_ids(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path)
        with bind_trace_id("reschedule-1"):
            logging.getLogger("core.services.task").info("moved task")
        for handler in root.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert "trace=reschedule-1 core.services.task - moved task" in text


def test_migrations_create_the_schema(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'portfolio.db').as_posix()}"
    run_migrations(db_url)

    engine = create_engine(db_url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {
        "projects",
        "tasks",
        "project_risks",
        "project_baselines",
        "users",
        "role_definitions",
        "audit_logs",
        "alembic_version",
    } <= tables


def test_open_service_graph_on_a_fresh_database(tmp_path, monkeypatch):
    from PySide6.QtCore import QSettings

    from core.events.domain_events import DomainEvents
    from infra.services import open_service_graph
    from infra.settings import PolicySettingsStore

    monkeypatch.delenv("PM_ADMIN_EMAIL", raising=False)
    db_url = f"sqlite:///{(tmp_path / 'app.db').as_posix()}"
    store = PolicySettingsStore(QSettings(str(tmp_path / "policy.ini"), QSettings.IniFormat))

    graph = open_service_graph(db_url, settings_store=store, events=DomainEvents())
    try:
        admin = graph.auth_service.sign_in("admin@example.com")
        assert graph.user_session.user == admin
        assert graph.project_service.list_projects() == []
    finally:
        graph.session.close()


def test_start_application_configures_logging_before_wiring(tmp_path, monkeypatch):
    from PySide6.QtCore import QSettings

    from core.events.domain_events import DomainEvents
    from infra.services import start_application
    from infra.settings import PolicySettingsStore

    monkeypatch.delenv("PM_ADMIN_EMAIL", raising=False)
    db_url = f"sqlite:///{(tmp_path / 'app.db').as_posix()}"
    store = PolicySettingsStore(QSettings(str(tmp_path / "policy.ini"), QSettings.IniFormat))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        graph = start_application(
            db_url,
            log_dir=tmp_path / "logs",
            settings_store=store,
            events=DomainEvents(),
        )
        graph.session.close()
        for handler in root.handlers:
            handler.flush()
        text = (tmp_path / "logs" / "portfolio.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert "Logging initialized" in text
    assert "infra.services - Starting portfolio services" in text
