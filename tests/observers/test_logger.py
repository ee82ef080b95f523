import logging

from blueprints.observers.dispatcher import EventBus
from blueprints.observers.events import ResourceApplied, new_ctx
from blueprints.observers.logger import LoggerObserver


def test_logger_observer_writes_event_fields(caplog):
    logger = logging.getLogger("event-log-test")
    bus = EventBus([LoggerObserver(logger)])

    with caplog.at_level(logging.INFO, logger="event-log-test"):
        bus.emit(ResourceApplied(
            resource="helm/flux-system/blueprints-fluxcd-addon",
            kind="helm",
            duration_ms=12,
            **new_ctx(cluster="blueprint-dev", context=None, run_id="run-1"),
        ))

    [record] = caplog.records
    assert record.msg == "[EVENT] %s: %s"
    message = record.getMessage()
    assert message.startswith("[EVENT] ResourceApplied: ")
    assert "run_id=run-1" in message
    assert "resource=helm/flux-system/blueprints-fluxcd-addon" in message
    assert "ts=" not in message
