from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional
from .coverage.map import CoverageMap
from .logging import get_logger

log = get_logger(__name__)

class EventKind(str, Enum):
    COVERAGE = "coverage"
    DEPRECATED = "deprecated"
    ERROR = "error"
    LOG = "log"
    RUN_END = "runEnd"
    RUN_START = "runStart"
    SERVER_START = "serverStart"
    SUITE_END = "suiteEnd"
    SUITE_START = "suiteStart"
    TEST_END = "testEnd"
    TEST_START = "testStart"
    TUNNEL_DOWNLOAD_PROGRESS = "tunnelDownloadProgress"
    TUNNEL_START = "tunnelStart"
    TUNNEL_STATUS = "tunnelStatus"

@dataclass
class CoverageMessage:
    session_id: str
    coverage: Dict[str, Any]

@dataclass(frozen=True)
class DeprecationMessage:
    original: str
    replacement: Optional[str] = None
    message: Optional[str] = None

@dataclass
class TunnelProgress:
    received: int
    total: int

@dataclass
class TunnelMessage:
    status: str = ""
    progress: Optional[TunnelProgress] = None

@dataclass
class ServerInfo:
    port: int
    socket_port: Optional[int] = None

Handler = Callable[..., Any]

class EventHub:
    """Serial dispatch of executor events to registered reporters."""

    def __init__(self):
        self._reporters: List[Any] = []
        self._table: Dict[EventKind, List[Handler]] = {}
        # everything reported in this run, across sessions
        self.coverage = CoverageMap()

    def register(self, reporter) -> None:
        self._reporters.append(reporter)
        handlers: Mapping[EventKind, Handler] = reporter.handlers()
        for kind, handler in handlers.items():
            self._table.setdefault(EventKind(kind), []).append(handler)

    @property
    def reporters(self) -> List[Any]:
        return list(self._reporters)

    def emit(self, kind, *payload: Any) -> None:
        kind = EventKind(kind)
        if kind is EventKind.COVERAGE and payload:
            try:
                self.coverage.merge(payload[0].coverage)
            except Exception:
                log.exception("Could not add coverage to the run totals")
        for handler in self._table.get(kind, []):
            try:
                handler(*payload)
            except Exception:
                log.exception("Reporter handler for %s failed", kind.value)

    @property
    def failed(self) -> bool:
        return any(getattr(r, "failed", False) for r in self._reporters)
