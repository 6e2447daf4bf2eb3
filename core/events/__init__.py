from core.events.domain_events import DomainEvents, domain_events
from core.events.signal import Signal

__all__ = ["DomainEvents", "domain_events", "Signal"]
