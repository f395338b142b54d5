from __future__ import annotations
from typing import Any, Callable, Dict, Optional, TextIO, Union
from .base import Reporter
from ..config import ReportType, ReporterConfig
from ..coverage.map import CoverageMap
from ..coverage.report import create_report
from ..events import EventHub, EventKind

class CoverageReporter(Reporter):
    def __init__(self, hub: Optional[EventHub] = None, config: Optional[ReporterConfig] = None,
                 output: Optional[TextIO] = None):
        super().__init__(config, output)
        self.hub = hub

    @property
    def report_type(self) -> ReportType:
        return self.config.report_type

    def create_coverage_report(self, report_type: ReportType, data: Union[CoverageMap, Dict[str, Any]]) -> None:
        create_report(data, report_type, self.console, filename=self.config.filename,
                      watermarks=self.config.watermarks)

    def handlers(self) -> Dict[EventKind, Callable[..., Any]]:
        return {EventKind.RUN_END: self.run_end}

    def run_end(self) -> None:
        if self.hub is not None:
            self.create_coverage_report(self.report_type, self.hub.coverage)
