"""Per-session bookkeeping behind the console reporter.

Every remote browser session has one root suite. The aggregator keeps that
suite and the coverage each session reports, and turns suite/run completion
into summary records that a reporter can render.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
from .coverage.map import CoverageMap, create_coverage_map
from .logging import get_logger
from .runners.results import Error, Suite, has_error

log = get_logger(__name__)

@dataclass
class Session:
    suite: Suite
    coverage: Optional[CoverageMap] = None

def _counts_line(prefix: str, failed: int, total: int, skipped: int, fatal: bool) -> str:
    line = f"{prefix}{failed}/{total} tests failed"
    if skipped:
        line += f" ({skipped} skipped)"
    if fatal:
        line += "; fatal error occurred"
    return line

@dataclass
class SuiteFailure:
    suite: Suite
    error: Error

    @property
    def message(self) -> str:
        return f"Suite {self.suite.id} FAILED"

@dataclass
class OrphanedSuiteEnd:
    session_id: str

    @property
    def message(self) -> str:
        return f"BUG: suiteEnd was received for invalid session {self.session_id}"

@dataclass
class SessionSummary:
    name: str
    coverage: Optional[CoverageMap]
    num_tests: int
    num_failed_tests: int
    num_skipped_tests: int
    fatal_error: bool

    @property
    def failed(self) -> bool:
        return self.num_failed_tests > 0 or self.fatal_error

    @property
    def message(self) -> str:
        return _counts_line(f"{self.name}: ", self.num_failed_tests, self.num_tests, self.num_skipped_tests, self.fatal_error)

@dataclass
class RunSummary:
    num_sessions: int
    coverage: CoverageMap
    num_tests: int
    num_failed_tests: int
    num_skipped_tests: int
    fatal_error: bool

    @property
    def failed(self) -> bool:
        return self.num_failed_tests > 0 or self.fatal_error

    @property
    def message(self) -> str:
        return _counts_line(f"TOTAL: tested {self.num_sessions} platforms, ", self.num_failed_tests,
                            self.num_tests, self.num_skipped_tests, self.fatal_error)

SuiteOutcome = Union[SuiteFailure, OrphanedSuiteEnd, SessionSummary]

class SessionAggregator:
    def __init__(self, serve_only: bool = False):
        self.serve_only = serve_only
        self.sessions: Dict[str, Session] = {}
        # sticky: set by suite- or run-level errors, never cleared
        self.has_errors = False

    def on_suite_start(self, suite: Suite) -> Optional[Session]:
        if suite.has_parent:
            return None
        session = Session(suite=suite)
        self.sessions[suite.session_id or ""] = session
        return session

    def on_coverage(self, session_id: Optional[str], coverage: Union[CoverageMap, Dict[str, Any]]) -> bool:
        session = self.sessions.get(session_id or "")
        if session is None:
            # the runner host reports with an empty session id and has no session of its own
            if session_id:
                log.warning("Coverage received for unknown session %s", session_id)
            return False
        incoming = create_coverage_map(coverage)
        if session.coverage is None:
            session.coverage = incoming
        else:
            session.coverage.merge(incoming)
        return True

    def record_error(self) -> None:
        self.has_errors = True

    def on_suite_end(self, suite: Suite) -> Optional[SuiteOutcome]:
        if suite.error is not None:
            self.has_errors = True
            return SuiteFailure(suite=suite, error=suite.error)
        if suite.has_parent:
            return None
        session = self.sessions.get(suite.session_id or "")
        if session is None:
            if self.serve_only:
                return None
            return OrphanedSuiteEnd(session_id=suite.session_id)
        return SessionSummary(
            name=suite.name,
            coverage=session.coverage,
            num_tests=suite.num_tests,
            num_failed_tests=suite.num_failed_tests,
            num_skipped_tests=suite.num_skipped_tests,
            fatal_error=has_error(suite),
        )

    def _counts(self) -> Tuple[int, int, int, bool]:
        tests = failed = skipped = 0
        fatal = self.has_errors
        for session in self.sessions.values():
            tests += session.suite.num_tests
            failed += session.suite.num_failed_tests
            skipped += session.suite.num_skipped_tests
            fatal = fatal or has_error(session.suite)
        return tests, failed, skipped, fatal

    def totals(self) -> RunSummary:
        merged = create_coverage_map()
        for session in self.sessions.values():
            if session.coverage is not None:
                merged.merge(session.coverage)
        return RunSummary(len(self.sessions), merged, *self._counts())

    def on_run_end(self) -> Optional[RunSummary]:
        # a lone session has already printed its own summary
        if len(self.sessions) <= 1:
            return None
        return self.totals()

    @property
    def failed(self) -> bool:
        _, failed, _, fatal = self._counts()
        return failed > 0 or fatal
