from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Set, TextIO, Tuple
from rich.control import Control, ControlType
from rich.text import Text
from .base import format_seconds
from .coverage import CoverageReporter
from ..aggregation import OrphanedSuiteEnd, RunSummary, SessionAggregator, SessionSummary, SuiteFailure
from ..config import ReporterConfig
from ..events import CoverageMessage, DeprecationMessage, EventHub, EventKind, ServerInfo, TunnelMessage
from ..runners.results import Error, Suite, Test

class ConsoleReporter(CoverageReporter):
    def __init__(self, hub: Optional[EventHub] = None, config: Optional[ReporterConfig] = None,
                 output: Optional[TextIO] = None, serve_only: bool = False):
        super().__init__(hub, config, output)
        self.aggregator = SessionAggregator(serve_only=serve_only)
        self._deprecations: Set[Tuple[Optional[str], Optional[str], Optional[str]]] = set()

    @property
    def sessions(self):
        return self.aggregator.sessions

    @property
    def has_errors(self) -> bool:
        return self.aggregator.has_errors

    @property
    def failed(self) -> bool:
        return self.aggregator.failed

    def handlers(self) -> Dict[EventKind, Callable[..., Any]]:
        return {
            EventKind.COVERAGE: self.coverage,
            EventKind.DEPRECATED: self.deprecated,
            EventKind.ERROR: self.error,
            EventKind.LOG: self.log,
            EventKind.RUN_END: self.run_end,
            EventKind.SERVER_START: self.server_start,
            EventKind.SUITE_END: self.suite_end,
            EventKind.SUITE_START: self.suite_start,
            EventKind.TEST_END: self.test_end,
            EventKind.TUNNEL_DOWNLOAD_PROGRESS: self.tunnel_download_progress,
            EventKind.TUNNEL_START: self.tunnel_start,
            EventKind.TUNNEL_STATUS: self.tunnel_status,
        }

    def _write(self, text: str = "", style: Optional[str] = None, end: str = "\n") -> None:
        self.console.print(Text(text, style=style or ""), end=end)

    def _write_error(self, error: Error) -> None:
        self._write(self.format_error(error), style="red")

    def coverage(self, message: CoverageMessage) -> None:
        self.aggregator.on_coverage(message.session_id, message.coverage)

    def deprecated(self, message: DeprecationMessage) -> None:
        key = (message.original, message.replacement, message.message)
        if key in self._deprecations:
            return
        self._deprecations.add(key)

        line = f"⚠︎ {message.original} is deprecated. "
        if message.replacement:
            line += f"Use {message.replacement} instead."
        else:
            line += "Please open a ticket if you still require access to this function."
        if message.message:
            line += f" {message.message}"
        self._write(line, style="yellow")

    def error(self, error: Error) -> None:
        self._write("(ノಠ益ಠ)ノ彡┻━┻", style="red")
        self._write_error(error)
        self._write()
        self.aggregator.record_error()

    def log(self, message: str) -> None:
        for line in message.split("\n"):
            self._write(f"DEBUG: {line}")

    def server_start(self, server: ServerInfo) -> None:
        line = f"Listening on localhost:{server.port}"
        if server.socket_port:
            line += f" (ws {server.socket_port})"
        self._write(line)

    def suite_start(self, suite: Suite) -> None:
        session = self.aggregator.on_suite_start(suite)
        if session is not None and suite.session_id:
            self._write()
            self._write(f"‣ Created remote session {suite.name} ({suite.session_id})")

    def suite_end(self, suite: Suite) -> None:
        outcome = self.aggregator.on_suite_end(suite)
        if isinstance(outcome, SuiteFailure):
            self._write(outcome.message, style="red")
            self._write_error(outcome.error)
            self._write()
        elif isinstance(outcome, OrphanedSuiteEnd):
            self._write(outcome.message, style="bold yellow")
        elif isinstance(outcome, SessionSummary):
            if outcome.coverage is not None:
                self._write()
                self.create_coverage_report(self.report_type, outcome.coverage)
            else:
                self._write(f"No unit test coverage for {outcome.name}")
            self._summary(outcome)

    def run_end(self) -> None:
        outcome = self.aggregator.on_run_end()
        if outcome is None:
            return
        if outcome.coverage.files():
            self._write()
            self._write("Total coverage", style="bold")
            self.create_coverage_report(self.report_type, outcome.coverage)
        self._summary(outcome)

    def _summary(self, outcome: SessionSummary | RunSummary) -> None:
        self._write(outcome.message, style="bold red" if outcome.failed else "bold green")

    def test_end(self, test: Test) -> None:
        elapsed = f" ({format_seconds(test.time_elapsed)}s)"
        if test.error is not None:
            self._write(f"× {test.id}{elapsed}", style="red")
            self._write_error(test.error)
            self._write()
        elif test.skipped:
            if not self.config.hide_skipped:
                line = Text(f"~ {test.id}", style="magenta")
                line.append(f" ({test.skipped})")
                self.console.print(line)
        elif not self.config.hide_passed:
            line = Text(f"✓ {test.id}", style="green")
            line.append(elapsed)
            self.console.print(line)

    def tunnel_download_progress(self, message: TunnelMessage) -> None:
        progress = message.progress
        if progress is None or not progress.total:
            return
        self._write(f"Tunnel download: {progress.received / progress.total * 100:.3f}%", end="")
        self.console.control(Control(ControlType.CARRIAGE_RETURN))

    def tunnel_start(self, message: Optional[TunnelMessage] = None) -> None:
        self._write("Tunnel started")

    def tunnel_status(self, message: TunnelMessage) -> None:
        self._write(message.status, end="")
        self.console.control(Control((ControlType.ERASE_IN_LINE, 0), ControlType.CARRIAGE_RETURN))
