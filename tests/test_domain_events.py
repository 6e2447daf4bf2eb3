from core.events.domain_events import DomainEvents, domain_events
from core.events.signal import Signal


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.project_changed.connect(_handler)
    domain_events.project_changed.emit("p-1")
    domain_events.project_changed.disconnect(_handler)
    domain_events.project_changed.emit("p-2")

    assert seen == ["p-1"]


def test_connect_is_idempotent_and_instances_are_isolated():
    events = DomainEvents()
    seen: list[str] = []

    events.tasks_changed.connect(seen.append)
    events.tasks_changed.connect(seen.append)
    events.tasks_changed.emit("p-1")
    domain_events.tasks_changed.emit("p-2")

    assert seen == ["p-1"]
    assert events.tasks_changed.subscriber_count() == 1


def test_signal_emit_prunes_deleted_view_callbacks():
    signal: Signal[str] = Signal("health_changed")
    seen: list[str] = []

    class _DeletedWidgetCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise RuntimeError("Internal C++ object (PySide6.QtWidgets.QTableView) already deleted.")

    deleted = _DeletedWidgetCallback()

    signal.connect(deleted)
    signal.connect(seen.append)

    signal.emit("p-1")
    signal.emit("p-2")

    assert deleted.calls == 1
    assert seen == ["p-1", "p-2"]
    assert signal.subscriber_count() == 1


def test_signal_emit_keeps_other_runtime_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    try:
        signal.emit("x")
        assert False, "Expected RuntimeError to propagate"
    except RuntimeError as exc:
        assert str(exc) == "boom"
