# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["ConsoleReporter", "SessionAggregator", "EventHub"]

def __getattr__(name):
    if name == "ConsoleReporter":
        from .reporters.console import ConsoleReporter as _ConsoleReporter
        return _ConsoleReporter
    if name == "SessionAggregator":
        from .aggregation import SessionAggregator as _SessionAggregator
        return _SessionAggregator
    if name == "EventHub":
        from .events import EventHub as _EventHub
        return _EventHub
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
