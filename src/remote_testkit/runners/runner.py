from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, Optional, TextIO, Tuple
import json
import pathlib
from ..config import AppConfig
from ..events import (CoverageMessage, DeprecationMessage, EventHub, EventKind, ServerInfo,
                      TunnelMessage, TunnelProgress)
from ..logging import get_logger
from ..reporters.console import ConsoleReporter
from ..reporters.junit import JUnitReporter
from .results import ErrorInfo, Suite, parse_suite, parse_test

log = get_logger(__name__)

class EventRunner:
    """Replays a recorded executor event stream through an EventHub.

    Each line of the input is a JSON object ``{"event": <kind>, "data": <payload>}``.
    """

    def __init__(self, hub: EventHub, cfg: Optional[AppConfig] = None):
        self.cfg = cfg or AppConfig()
        self.hub = hub
        # one tree per suite and session; sessions may run suites with the same id
        self._suites: Dict[Tuple[str, str], Suite] = {}

    @classmethod
    def from_config(cls, cfg: AppConfig, output: Optional[TextIO] = None) -> "EventRunner":
        hub = EventHub()
        hub.register(ConsoleReporter(hub, cfg.reporter, output, serve_only=cfg.serve_only))
        if cfg.junit:
            hub.register(JUnitReporter(cfg.junit, cfg.reporter))
        return cls(hub, cfg)

    def _suite(self, data: Dict[str, Any]) -> Suite:
        suite = parse_suite(data)
        key = (suite.session_id, suite.id)
        known = self._suites.get(key)
        if known is None:
            self._suites[key] = suite
            return suite
        known.update(suite)
        return known

    def decode(self, kind: EventKind, data: Any) -> Tuple[Any, ...]:
        if kind in (EventKind.SUITE_START, EventKind.SUITE_END):
            return (self._suite(data),)
        if kind in (EventKind.TEST_START, EventKind.TEST_END):
            return (parse_test(data),)
        if kind is EventKind.COVERAGE:
            return (CoverageMessage(session_id=data.get("sessionId") or "", coverage=data.get("coverage") or {}),)
        if kind is EventKind.DEPRECATED:
            return (DeprecationMessage(data["original"], data.get("replacement"), data.get("message")),)
        if kind is EventKind.ERROR:
            return (ErrorInfo.from_data(data),)
        if kind is EventKind.LOG:
            return (str(data),)
        if kind is EventKind.SERVER_START:
            return (ServerInfo(port=int(data["port"]), socket_port=data.get("socketPort")),)
        if kind in (EventKind.TUNNEL_STATUS, EventKind.TUNNEL_DOWNLOAD_PROGRESS):
            progress = data.get("progress")
            return (TunnelMessage(status=data.get("status") or "",
                                  progress=TunnelProgress(progress["received"], progress["total"]) if progress else None),)
        return ()

    def events(self, lines: Iterable[str]) -> Iterator[Tuple[EventKind, Tuple[Any, ...]]]:
        for n, line in enumerate(lines, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                kind = EventKind(record["event"])
                payload = self.decode(kind, record.get("data"))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                log.warning("Skipping event on line %d: %r", n, e)
                continue
            yield kind, payload

    def replay(self, lines: Iterable[str]) -> bool:
        for kind, payload in self.events(lines):
            self.hub.emit(kind, *payload)
        return not self.hub.failed

    def run(self, path: str) -> bool:
        with pathlib.Path(path).open(encoding="utf-8") as f:
            return self.replay(f)
